# applications/repositories.py
"""
Job application persistence.

The (job, user) unique constraint is the real duplicate guard. A racing
second insert raises ``django.db.IntegrityError``.
"""

from typing import List, Optional, Protocol

from applications.models import JobApplication


class JobApplicationRepository(Protocol):
    def create(self, **fields) -> JobApplication: ...

    def find_by_job_and_user(self, job_id, user_id) -> Optional[JobApplication]: ...

    def find_by_user_id(self, user_id) -> List[JobApplication]: ...

    def find_by_job_id(self, job_id) -> List[JobApplication]: ...


class DjangoJobApplicationRepository:
    def create(self, **fields) -> JobApplication:
        return JobApplication.objects.create(**fields)

    def find_by_job_and_user(self, job_id, user_id) -> Optional[JobApplication]:
        return JobApplication.objects.filter(job_id=job_id, user_id=user_id).first()

    def find_by_user_id(self, user_id) -> List[JobApplication]:
        return list(
            JobApplication.objects.select_related("job", "job__company")
            .filter(user_id=user_id)
            .order_by("-applied_at", "-id")
        )

    def find_by_job_id(self, job_id) -> List[JobApplication]:
        return list(
            JobApplication.objects.select_related("user")
            .filter(job_id=job_id)
            .order_by("-applied_at", "-id")
        )
