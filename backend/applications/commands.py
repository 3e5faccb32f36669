# applications/commands.py
"""
Command layer for job applications.

Anti-self-dealing rules (companies.policies.apply_denial_reason):
- A job's author cannot apply to it
- The company owner cannot apply to the company's jobs
- OWNER/RECRUITER members cannot apply to the company's jobs

Duplicate prevention is check-then-act. The explicit lookup gives the
"already applied" message; the (job, user) constraint catches the race
where two requests pass the lookup at the same time.
"""

import logging
from typing import List

from django.db import IntegrityError, transaction

from applications.models import ApplicationStatus, JobApplication
from applications.repositories import DjangoJobApplicationRepository, JobApplicationRepository
from applications.types import ApplicationInput
from companies import policies
from companies.repositories import CompanyRepository, DjangoCompanyRepository
from core.errors import ConflictError, ForbiddenError, NotFoundError, is_unique_violation
from jobs.models import Job
from jobs.repositories import DjangoJobRepository, JobRepository

logger = logging.getLogger(__name__)

ALREADY_APPLIED = "You have already applied for this position."


class ApplicationLifecycle:
    def __init__(
        self,
        applications: JobApplicationRepository,
        jobs: JobRepository,
        companies: CompanyRepository,
    ):
        self.applications = applications
        self.jobs = jobs
        self.companies = companies

    def apply(self, actor_id, data: ApplicationInput) -> JobApplication:
        """
        Submit an application for ``data.job_id`` as ``actor_id``.

        Raises:
            NotFoundError: Job or applicant does not exist
            ForbiddenError: Actor is the author, owner or a recruiter of the company
            ConflictError: Actor already applied (found up front or by the constraint)
        """
        job = self._get_job(data.job_id)
        company, membership = self._load_company_context(job, actor_id)

        denial = policies.apply_denial_reason(actor_id, job, company, membership)
        if denial is not None:
            rule, reason = denial
            logger.warning(
                "Job application denied",
                extra={"rule": rule, "actor_id": actor_id, "job_id": job.pk},
            )
            raise ForbiddenError(reason, rule=rule)

        if not self.companies.user_exists(actor_id):
            raise NotFoundError("User not found.")
        if self.applications.find_by_job_and_user(job.pk, actor_id) is not None:
            raise ConflictError(ALREADY_APPLIED)

        try:
            with transaction.atomic():
                application = self.applications.create(
                    job_id=job.pk,
                    user_id=actor_id,
                    cover_letter=data.cover_letter or "",
                    resume_url=data.resume_url or None,
                    status=ApplicationStatus.PENDING,
                )
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise ConflictError(ALREADY_APPLIED) from exc

        logger.info(
            "Job application submitted",
            extra={"application_id": application.pk, "job_id": job.pk, "user_id": actor_id},
        )
        return application

    def list_for_job(self, actor_id, job_id) -> List[JobApplication]:
        """Applications for a job; visible to its author and the company's job managers."""
        job = self._get_job(job_id)
        company, membership = self._load_company_context(job, actor_id)

        if not policies.can_view_job_applications(actor_id, job, company, membership):
            logger.warning(
                "Job application listing denied",
                extra={"rule": policies.RULE_VIEW_APPLICATIONS, "actor_id": actor_id, "job_id": job.pk},
            )
            raise ForbiddenError(
                "You do not have permission to view applications for this job.",
                rule=policies.RULE_VIEW_APPLICATIONS,
            )

        return self.applications.find_by_job_id(job.pk)

    def list_for_user(self, actor_id) -> List[JobApplication]:
        return self.applications.find_by_user_id(actor_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _get_job(self, job_id) -> Job:
        job = self.jobs.find_by_id(job_id)
        if job is None:
            raise NotFoundError("Job not found.")
        return job

    def _load_company_context(self, job: Job, actor_id):
        if job.company_id is None:
            return None, None
        company = self.companies.find_by_id(job.company_id)
        if company is None:
            return None, None
        return company, self.companies.find_member(company.pk, actor_id)


def build_application_lifecycle() -> ApplicationLifecycle:
    """ApplicationLifecycle wired to the ORM repositories."""
    return ApplicationLifecycle(
        DjangoJobApplicationRepository(),
        DjangoJobRepository(),
        DjangoCompanyRepository(),
    )
