# tests/test_scenarios.py
"""
End-to-end flows through all three lifecycles.
"""

import re

import pytest

from applications.types import ApplicationInput
from companies import policies
from companies.types import CompanyInput
from core.errors import ConflictError, ForbiddenError
from jobs.types import JobInput


@pytest.mark.django_db
def test_same_name_companies_get_distinct_slugs(company_lifecycle, owner, outsider):
    first = company_lifecycle.create(owner.id, CompanyInput(name="Acme"))
    second = company_lifecycle.create(outsider.id, CompanyInput(name="Acme"))

    assert first.slug == "acme"
    assert re.fullmatch(r"acme-[a-z0-9]{5}", second.slug)
    assert company_lifecycle.get_by_slug(second.slug).owner_id == outsider.id


@pytest.mark.django_db
def test_hiring_flow(company_lifecycle, job_lifecycle, application_lifecycle, owner, recruiter, outsider):
    company = company_lifecycle.create(owner.id, CompanyInput(name="Acme"))
    company_lifecycle.manage_member(owner.id, company.pk, recruiter.id, "ADD", role="RECRUITER")

    # Nobody posts before verification.
    with pytest.raises(ForbiddenError) as exc_info:
        job_lifecycle.create(recruiter.id, JobInput(company_id=company.pk, title="SRE", description="On call."))
    assert exc_info.value.rule == policies.RULE_COMPANY_UNVERIFIED

    company_lifecycle.verify_domain(recruiter.id, company.pk, "recruiter@acme.test")
    job = job_lifecycle.create(recruiter.id, JobInput(company_id=company.pk, title="SRE", description="On call."))

    application_lifecycle.apply(outsider.id, ApplicationInput(job_id=job.pk, cover_letter="Pager ready."))

    with pytest.raises(ConflictError):
        application_lifecycle.apply(outsider.id, ApplicationInput(job_id=job.pk))

    with pytest.raises(ForbiddenError) as exc_info:
        application_lifecycle.apply(recruiter.id, ApplicationInput(job_id=job.pk))
    assert exc_info.value.rule == policies.RULE_APPLY_SELF_JOB

    with pytest.raises(ForbiddenError) as exc_info:
        application_lifecycle.apply(owner.id, ApplicationInput(job_id=job.pk))
    assert exc_info.value.rule == policies.RULE_APPLY_COMPANY_OWNER

    assert [a.user_id for a in application_lifecycle.list_for_job(owner.id, job.pk)] == [outsider.id]


@pytest.mark.django_db
def test_recruiter_posts_jobs_but_cannot_manage_members(
    company_lifecycle, job_lifecycle, verified_company, recruiter, recruiter_membership, member
):
    with pytest.raises(ForbiddenError) as exc_info:
        company_lifecycle.manage_member(recruiter.id, verified_company.pk, member.id, "ADD")
    assert exc_info.value.rule == policies.RULE_MANAGE_MEMBERS

    job = job_lifecycle.create(
        recruiter.id,
        JobInput(company_id=verified_company.pk, title="Data Engineer", description="Pipelines."),
    )
    assert job.author_id == recruiter.id
