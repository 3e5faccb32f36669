# jobs/repositories.py
"""
Job persistence.

Slugs are unique across all jobs (a namespace separate from company
slugs). A duplicate slug insert raises ``django.db.IntegrityError``;
JobLifecycle turns that into ConflictError.
"""

from typing import Iterable, Optional, Protocol

from django.db.models import Q

from jobs.models import Job
from jobs.types import JobFilter, JobPage


class JobRepository(Protocol):
    def create(self, topic_ids: Iterable[int] = (), **fields) -> Job: ...

    def find_by_id(self, job_id) -> Optional[Job]: ...

    def find_by_slug(self, slug: str) -> Optional[Job]: ...

    def slug_exists(self, slug: str) -> bool: ...

    def update(self, job: Job, changes: dict, topic_ids: Optional[Iterable[int]] = None) -> Job: ...

    def delete(self, job: Job) -> None: ...

    def find_all(self, job_filter: JobFilter, take: int) -> JobPage: ...


class DjangoJobRepository:
    def _queryset(self):
        return Job.objects.select_related("company", "author")

    def create(self, topic_ids: Iterable[int] = (), **fields) -> Job:
        job = Job.objects.create(**fields)
        topic_ids = list(topic_ids)
        if topic_ids:
            job.topics.set(topic_ids)
        return job

    def find_by_id(self, job_id) -> Optional[Job]:
        return self._queryset().filter(pk=job_id).first()

    def find_by_slug(self, slug: str) -> Optional[Job]:
        return self._queryset().filter(slug=slug).first()

    def slug_exists(self, slug: str) -> bool:
        return Job.objects.filter(slug=slug).exists()

    def update(self, job: Job, changes: dict, topic_ids: Optional[Iterable[int]] = None) -> Job:
        if changes:
            for field, value in changes.items():
                setattr(job, field, value)
            job.save(update_fields=[*changes.keys(), "updated_at"])
        if topic_ids is not None:
            job.topics.set(list(topic_ids))
        return job

    def delete(self, job: Job) -> None:
        job.delete()

    def find_all(self, job_filter: JobFilter, take: int) -> JobPage:
        qs = self._queryset().filter(is_active=job_filter.is_active)

        if job_filter.company_id:
            qs = qs.filter(company_id=job_filter.company_id)
        if job_filter.type:
            qs = qs.filter(type=job_filter.type)
        if job_filter.workplace:
            qs = qs.filter(workplace=job_filter.workplace)
        if job_filter.query:
            qs = qs.filter(
                Q(title__icontains=job_filter.query)
                | Q(description__icontains=job_filter.query)
            )

        skip = max(job_filter.skip, 0)
        total = qs.count()
        jobs = list(qs.order_by("-created_at", "-id")[skip:skip + take])
        return JobPage(jobs=jobs, total=total)
