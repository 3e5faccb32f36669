# topics/resolver.py
"""
Topic lookup used when a job is posted.

Topics are keyed by slug, so "Machine Learning" and "machine-learning"
resolve to the same row.
"""

import logging
from typing import Optional, Protocol

from core import slugs
from topics.models import Topic

logger = logging.getLogger(__name__)


class TopicResolver(Protocol):
    def resolve_or_create(self, name: str) -> Optional[int]:
        """Id of the topic called ``name`` (created if needed), None for an unusable name."""
        ...


class DjangoTopicResolver:
    def resolve_or_create(self, name: str) -> Optional[int]:
        name = (name or "").strip()
        # same name, same slug: no collision suffix here
        slug = slugs.normalize(name)
        if not slug:
            return None
        topic, created = Topic.objects.get_or_create(slug=slug, defaults={"name": name})
        if created:
            logger.info("Topic created", extra={"topic_id": topic.pk, "slug": slug})
        return topic.pk
