# applications/models.py
"""
Job applications.

One application per (job, user), enforced by a database constraint.
ApplicationLifecycle checks for an existing row first only to give a
friendlier error; the constraint is what actually prevents duplicates
when two requests race.

Status workflow:

    PENDING -> REVIEWING -> SHORTLISTED -> ACCEPTED
       |          |             |
       +----------+-------------+--> REJECTED
       +----------+-------------+--> WITHDRAWN

ACCEPTED, REJECTED and WITHDRAWN are terminal. Only PENDING is
produced by the command layer today.
"""

import uuid

from django.conf import settings
from django.db import models


class ApplicationStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    REVIEWING = "REVIEWING", "Reviewing"
    SHORTLISTED = "SHORTLISTED", "Shortlisted"
    ACCEPTED = "ACCEPTED", "Accepted"
    REJECTED = "REJECTED", "Rejected"
    WITHDRAWN = "WITHDRAWN", "Withdrawn"

    @classmethod
    def can_transition(cls, current: str, target: str) -> bool:
        return str(target) in ALLOWED_TRANSITIONS.get(str(current), frozenset())


ALLOWED_TRANSITIONS = {
    ApplicationStatus.PENDING.value: frozenset({
        ApplicationStatus.REVIEWING.value,
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.WITHDRAWN.value,
    }),
    ApplicationStatus.REVIEWING.value: frozenset({
        ApplicationStatus.SHORTLISTED.value,
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.WITHDRAWN.value,
    }),
    ApplicationStatus.SHORTLISTED.value: frozenset({
        ApplicationStatus.ACCEPTED.value,
        ApplicationStatus.REJECTED.value,
        ApplicationStatus.WITHDRAWN.value,
    }),
    ApplicationStatus.ACCEPTED.value: frozenset(),
    ApplicationStatus.REJECTED.value: frozenset(),
    ApplicationStatus.WITHDRAWN.value: frozenset(),
}


class JobApplication(models.Model):
    public_id = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    job = models.ForeignKey("jobs.Job", on_delete=models.CASCADE, related_name="applications")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="job_applications",
    )
    status = models.CharField(
        max_length=20,
        choices=ApplicationStatus.choices,
        default=ApplicationStatus.PENDING,
    )
    cover_letter = models.TextField(blank=True, default="")
    resume_url = models.CharField(max_length=500, null=True, blank=True)

    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-applied_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["job", "user"],
                name="uniq_job_application",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} -> {self.job_id} ({self.status})"

    def can_transition_to(self, target: str) -> bool:
        return ApplicationStatus.can_transition(self.status, target)
