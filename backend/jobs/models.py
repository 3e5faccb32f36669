# jobs/models.py
"""
Job postings.

A job belongs to exactly one company for its whole life: ``company`` is
set at creation and JobLifecycle never patches it. ``author`` is the
user who posted it and keeps edit rights even if later demoted.
"""

import uuid

from django.conf import settings
from django.db import models


def default_currency():
    return settings.JOB_DEFAULT_CURRENCY


class Job(models.Model):
    class Type(models.TextChoices):
        FULL_TIME = "FULL_TIME", "Full time"
        PART_TIME = "PART_TIME", "Part time"
        CONTRACT = "CONTRACT", "Contract"
        FREELANCE = "FREELANCE", "Freelance"
        INTERNSHIP = "INTERNSHIP", "Internship"
        REMOTE = "REMOTE", "Remote"

    class Workplace(models.TextChoices):
        ON_SITE = "ON_SITE", "On site"
        HYBRID = "HYBRID", "Hybrid"
        REMOTE = "REMOTE", "Remote"

    public_id = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    slug = models.SlugField(max_length=150, unique=True)
    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="jobs",
    )
    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="authored_jobs",
    )

    title = models.CharField(max_length=150)
    description = models.TextField()
    type = models.CharField(max_length=20, choices=Type.choices, default=Type.FULL_TIME)
    workplace = models.CharField(max_length=20, choices=Workplace.choices, default=Workplace.ON_SITE)
    location = models.CharField(max_length=255, blank=True, default="")
    salary_min = models.PositiveIntegerField(null=True, blank=True)
    salary_max = models.PositiveIntegerField(null=True, blank=True)
    currency = models.CharField(max_length=3, default=default_currency)
    apply_link = models.URLField(max_length=500, blank=True, default="")
    topics = models.ManyToManyField("topics.Topic", blank=True, related_name="jobs")

    is_active = models.BooleanField(default=True)
    is_featured = models.BooleanField(default=False)
    expires_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["company", "is_active"], name="job_company_active_idx"),
        ]

    def __str__(self):
        return f"{self.title} ({self.slug})"
