# companies/models.py
"""
Company and CompanyMembership.

A Company is always created together with an OWNER membership for
``owner`` (see CompanyLifecycle.create). Both rows are written in the
same transaction, so a company never exists without its owner
membership.

Workflow rules (who may change what) live in companies/policies.py,
not in save().
"""

import uuid

from django.conf import settings
from django.db import models


class Company(models.Model):
    class VerificationTier(models.TextChoices):
        UNVERIFIED = "UNVERIFIED", "Unverified"
        DOMAIN_VERIFIED = "DOMAIN_VERIFIED", "Domain verified"

    class Size(models.TextChoices):
        TINY = "1-10", "1-10"
        SMALL = "11-50", "11-50"
        MEDIUM = "51-200", "51-200"
        LARGE = "201-500", "201-500"
        XLARGE = "501-1000", "501-1000"
        ENTERPRISE = "1000+", "1000+"

    public_id = models.UUIDField(default=uuid.uuid4, editable=False, unique=True)
    slug = models.SlugField(max_length=100, unique=True)
    name = models.CharField(max_length=150)
    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="owned_companies",
    )

    verification_tier = models.CharField(
        max_length=20,
        choices=VerificationTier.choices,
        default=VerificationTier.UNVERIFIED,
    )
    verified_domain = models.CharField(max_length=255, null=True, blank=True)
    is_verified = models.BooleanField(default=False)

    logo_url = models.CharField(max_length=500, null=True, blank=True)
    description = models.TextField(blank=True, default="")
    website_url = models.URLField(max_length=500, blank=True, default="")
    location = models.CharField(max_length=255, blank=True, default="")
    size = models.CharField(max_length=10, choices=Size.choices, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Companies"
        ordering = ["name"]

    def __str__(self):
        return self.name


class CompanyMembership(models.Model):
    """
    The role a user holds inside one company.

    At most one row per (company, user). The owner's row is never
    removed through the command layer.
    """

    class Role(models.TextChoices):
        OWNER = "OWNER", "Owner"
        RECRUITER = "RECRUITER", "Recruiter"
        MEMBER = "MEMBER", "Member"

    company = models.ForeignKey(Company, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="company_memberships",
    )
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["company", "user"],
                name="uniq_company_membership",
            ),
        ]

    def __str__(self):
        return f"{self.user_id} @ {self.company_id} ({self.role})"
