# jobs/commands.py
"""
Command layer for job postings.

Posting a job requires BOTH:
1. The company is DOMAIN_VERIFIED. This is a hard business gate checked
   before any role check; not even the owner can post for an
   UNVERIFIED company.
2. The actor may manage the company's jobs (owner or OWNER/RECRUITER).

Updating or deleting a job is allowed for the job's author (even after
a demotion) or anyone who currently may manage the company's jobs.
"""

import logging
from typing import Iterable, List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from companies import policies
from companies.models import Company
from companies.repositories import CompanyRepository, DjangoCompanyRepository
from core import slugs
from core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
    is_unique_violation,
)
from jobs.models import Job
from jobs.repositories import DjangoJobRepository, JobRepository
from jobs.types import JobFilter, JobInput, JobPage, JobPatch
from topics.resolver import DjangoTopicResolver, TopicResolver

logger = logging.getLogger(__name__)


def _deny(rule: str, reason: str, actor_id, company_id, job_id=None) -> ForbiddenError:
    logger.warning(
        "Job command denied",
        extra={"rule": rule, "actor_id": actor_id, "company_id": company_id, "job_id": job_id},
    )
    return ForbiddenError(reason, rule=rule)


def _check_salary_range(salary_min, salary_max) -> None:
    if salary_min is not None and salary_max is not None and salary_min > salary_max:
        raise InvalidInputError("Minimum salary cannot be greater than maximum salary.")


class JobLifecycle:
    def __init__(self, jobs: JobRepository, companies: CompanyRepository, topics: TopicResolver):
        self.jobs = jobs
        self.companies = companies
        self.topics = topics

    # =========================================================================
    # Reads
    # =========================================================================

    def get_by_id(self, job_id) -> Job:
        job = self.jobs.find_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found.")
        return job

    def get_by_slug(self, slug: str) -> Job:
        job = self.jobs.find_by_slug(slug)
        if job is None:
            raise NotFoundError("Job not found.")
        return job

    def list_jobs(self, job_filter: Optional[JobFilter] = None) -> JobPage:
        job_filter = job_filter or JobFilter()
        take = job_filter.take or settings.JOBS_PAGE_SIZE
        return self.jobs.find_all(job_filter, take)

    # =========================================================================
    # Job Creation
    # =========================================================================

    def create(self, actor_id, data: JobInput) -> Job:
        """
        Post a job for ``data.company_id``.

        Raises:
            NotFoundError: Company does not exist
            ForbiddenError: Company is UNVERIFIED, or actor is not owner/recruiter
            InvalidInputError: Bad salary range or unsluggable title
            ConflictError: The allocated slug was taken concurrently
        """
        company = self.companies.find_by_id(data.company_id)
        if company is None:
            raise NotFoundError("Company not found.")

        if company.verification_tier == Company.VerificationTier.UNVERIFIED:
            raise _deny(
                policies.RULE_COMPANY_UNVERIFIED,
                "Only verified companies can post jobs. Please verify your company domain first.",
                actor_id,
                company.pk,
            )

        membership = self.companies.find_member(company.pk, actor_id)
        if not policies.can_post_or_manage_jobs(actor_id, company, membership):
            raise _deny(
                policies.RULE_MANAGE_JOBS,
                "You do not have permission to post jobs for this company.",
                actor_id,
                company.pk,
            )

        title = (data.title or "").strip()
        if not title:
            raise InvalidInputError("Job title is required.")
        _check_salary_range(data.salary_min, data.salary_max)

        topic_ids = self._resolve_topics(data.topics)
        slug = slugs.allocate(title, self.jobs.slug_exists)

        try:
            with transaction.atomic():
                job = self.jobs.create(
                    topic_ids=topic_ids,
                    slug=slug,
                    company_id=company.pk,
                    author_id=actor_id,
                    title=title,
                    description=(data.description or "").strip(),
                    type=data.type,
                    workplace=data.workplace,
                    location=data.location or "",
                    salary_min=data.salary_min,
                    salary_max=data.salary_max,
                    currency=data.currency or settings.JOB_DEFAULT_CURRENCY,
                    apply_link=data.apply_link or "",
                    expires_at=data.expires_at,
                )
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise ConflictError(f"Job slug '{slug}' is already taken. Please retry.") from exc

        logger.info(
            "Job created",
            extra={"job_id": job.pk, "slug": slug, "company_id": company.pk, "author_id": actor_id},
        )
        return job

    # =========================================================================
    # Job Updates
    # =========================================================================

    def update(self, actor_id, job_id, patch: JobPatch) -> Job:
        job = self.get_by_id(job_id)
        self._require_job_editor(actor_id, job, "You do not have permission to update this job.")

        changes = patch.changes()
        topic_names = changes.pop("topics", None)

        if "title" in changes:
            changes["title"] = (changes["title"] or "").strip()
            if not changes["title"]:
                raise InvalidInputError("Job title cannot be blank.")
        for field in ("location", "apply_link"):
            if field in changes and changes[field] is None:
                changes[field] = ""
        _check_salary_range(
            changes.get("salary_min", job.salary_min),
            changes.get("salary_max", job.salary_max),
        )

        topic_ids = self._resolve_topics(topic_names) if topic_names is not None else None
        job = self.jobs.update(job, changes, topic_ids=topic_ids)
        logger.info(
            "Job updated",
            extra={"job_id": job.pk, "actor_id": actor_id, "fields": sorted(changes)},
        )
        return job

    def delete(self, actor_id, job_id) -> None:
        job = self.get_by_id(job_id)
        self._require_job_editor(actor_id, job, "You do not have permission to delete this job.")

        self.jobs.delete(job)
        logger.info("Job deleted", extra={"job_id": job_id, "actor_id": actor_id})

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_job_editor(self, actor_id, job: Job, reason: str) -> None:
        if job.author_id == actor_id:
            return
        company = self.companies.find_by_id(job.company_id)
        membership = self.companies.find_member(job.company_id, actor_id)
        if company is None or not policies.can_post_or_manage_jobs(actor_id, company, membership):
            raise _deny(policies.RULE_MANAGE_JOBS, reason, actor_id, job.company_id, job.pk)

    def _resolve_topics(self, names: Optional[Iterable[str]]) -> List[int]:
        topic_ids = []
        for name in names or []:
            topic_id = self.topics.resolve_or_create(name)
            if topic_id is not None and topic_id not in topic_ids:
                topic_ids.append(topic_id)
        return topic_ids


def build_job_lifecycle() -> JobLifecycle:
    """JobLifecycle wired to the ORM repositories."""
    return JobLifecycle(DjangoJobRepository(), DjangoCompanyRepository(), DjangoTopicResolver())
