# tests/conftest.py
"""
Pytest fixtures for HireHub tests.

Lifecycles are wired to the ORM repositories; only blob storage is
replaced (InMemoryBlobStore) so logo tests never touch the filesystem.
"""

import pytest
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import SimpleUploadedFile

from applications.commands import ApplicationLifecycle
from applications.repositories import DjangoJobApplicationRepository
from companies.commands import CompanyLifecycle
from companies.models import Company, CompanyMembership
from companies.repositories import DjangoCompanyRepository
from jobs.commands import JobLifecycle
from jobs.models import Job
from jobs.repositories import DjangoJobRepository
from topics.resolver import DjangoTopicResolver


User = get_user_model()


class InMemoryBlobStore:
    """BlobStore that keeps uploads in a dict keyed by URL."""

    base_url = "https://cdn.test/"

    def __init__(self):
        self.blobs = {}
        self.deleted = []

    def upload(self, file, path):
        url = f"{self.base_url}{path}"
        self.blobs[url] = file.read()
        return url

    def delete(self, url):
        self.deleted.append(url)
        self.blobs.pop(url, None)


def make_user(email, name=""):
    return User.objects.create_user(email=email, password="testpass123", name=name)


# =============================================================================
# User Fixtures
# =============================================================================

@pytest.fixture
def owner(db):
    return make_user("owner@acme.test", "Company Owner")


@pytest.fixture
def recruiter(db):
    return make_user("recruiter@acme.test", "Company Recruiter")


@pytest.fixture
def member(db):
    return make_user("member@acme.test", "Company Member")


@pytest.fixture
def outsider(db):
    return make_user("outsider@example.test", "Job Seeker")


# =============================================================================
# Lifecycle Fixtures
# =============================================================================

@pytest.fixture
def blob_store():
    return InMemoryBlobStore()


@pytest.fixture
def company_lifecycle(blob_store):
    return CompanyLifecycle(DjangoCompanyRepository(), blob_store)


@pytest.fixture
def job_lifecycle():
    return JobLifecycle(DjangoJobRepository(), DjangoCompanyRepository(), DjangoTopicResolver())


@pytest.fixture
def application_lifecycle():
    return ApplicationLifecycle(
        DjangoJobApplicationRepository(),
        DjangoJobRepository(),
        DjangoCompanyRepository(),
    )


# =============================================================================
# Company Fixtures
# =============================================================================

@pytest.fixture
def company(db, owner):
    """An UNVERIFIED company with its OWNER membership."""
    company = Company.objects.create(name="Acme", slug="acme", owner=owner)
    CompanyMembership.objects.create(
        company=company,
        user=owner,
        role=CompanyMembership.Role.OWNER,
    )
    return company


@pytest.fixture
def verified_company(company):
    company.verification_tier = Company.VerificationTier.DOMAIN_VERIFIED
    company.verified_domain = "acme.test"
    company.is_verified = True
    company.save()
    return company


@pytest.fixture
def recruiter_membership(company, recruiter):
    return CompanyMembership.objects.create(
        company=company,
        user=recruiter,
        role=CompanyMembership.Role.RECRUITER,
    )


@pytest.fixture
def member_membership(company, member):
    return CompanyMembership.objects.create(
        company=company,
        user=member,
        role=CompanyMembership.Role.MEMBER,
    )


# =============================================================================
# Job Fixtures
# =============================================================================

@pytest.fixture
def job(verified_company, recruiter, recruiter_membership):
    """A job posted by the recruiter."""
    return Job.objects.create(
        slug="backend-engineer",
        company=verified_company,
        author=recruiter,
        title="Backend Engineer",
        description="Build APIs.",
    )


@pytest.fixture
def logo_file():
    return SimpleUploadedFile("logo.png", b"\x89PNG fake image", content_type="image/png")
