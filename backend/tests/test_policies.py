# tests/test_policies.py
"""
Tests for companies.policies.

Policies are pure: they run against unsaved model instances, no database.
"""

from companies import policies
from companies.models import Company, CompanyMembership
from jobs.models import Job

Role = CompanyMembership.Role

OWNER_ID = 1
RECRUITER_ID = 2
MEMBER_ID = 3
OUTSIDER_ID = 4


def make_company():
    return Company(pk=10, name="Acme", slug="acme", owner_id=OWNER_ID)


def make_membership(user_id, role):
    return CompanyMembership(company_id=10, user_id=user_id, role=role)


def make_job(author_id=RECRUITER_ID):
    return Job(pk=20, company_id=10, author_id=author_id, title="Engineer", slug="engineer")


# =============================================================================
# Company Policies
# =============================================================================

class TestCompanyPolicies:
    def test_owner_of_record_manages_company(self):
        assert policies.can_manage_company(OWNER_ID, make_company(), None)

    def test_owner_role_manages_company(self):
        membership = make_membership(MEMBER_ID, Role.OWNER)
        assert policies.can_manage_company(MEMBER_ID, make_company(), membership)

    def test_recruiter_cannot_manage_company(self):
        membership = make_membership(RECRUITER_ID, Role.RECRUITER)
        assert not policies.can_manage_company(RECRUITER_ID, make_company(), membership)

    def test_recruiter_cannot_manage_members(self):
        membership = make_membership(RECRUITER_ID, Role.RECRUITER)
        assert not policies.can_manage_members(RECRUITER_ID, make_company(), membership)

    def test_non_member_treated_as_member(self):
        assert not policies.can_manage_members(OUTSIDER_ID, make_company(), None)
        assert not policies.can_post_or_manage_jobs(OUTSIDER_ID, make_company(), None)


# =============================================================================
# Job Policies
# =============================================================================

class TestJobPolicies:
    def test_recruiter_posts_jobs(self):
        membership = make_membership(RECRUITER_ID, Role.RECRUITER)
        assert policies.can_post_or_manage_jobs(RECRUITER_ID, make_company(), membership)

    def test_member_cannot_post_jobs(self):
        membership = make_membership(MEMBER_ID, Role.MEMBER)
        assert not policies.can_post_or_manage_jobs(MEMBER_ID, make_company(), membership)

    def test_owner_without_membership_posts_jobs(self):
        assert policies.can_post_or_manage_jobs(OWNER_ID, make_company(), None)

    def test_author_views_applications_without_company(self):
        assert policies.can_view_job_applications(RECRUITER_ID, make_job(), None, None)

    def test_non_author_without_company_cannot_view(self):
        assert not policies.can_view_job_applications(OWNER_ID, make_job(), None, None)

    def test_owner_views_applications(self):
        assert policies.can_view_job_applications(OWNER_ID, make_job(), make_company(), None)

    def test_member_cannot_view_applications(self):
        membership = make_membership(MEMBER_ID, Role.MEMBER)
        assert not policies.can_view_job_applications(MEMBER_ID, make_job(), make_company(), membership)


# =============================================================================
# Application Policies
# =============================================================================

class TestApplyPolicy:
    def test_author_denied_first(self):
        # The owner authored the job: the self-job rule wins over the owner rule.
        job = make_job(author_id=OWNER_ID)
        rule, _ = policies.apply_denial_reason(OWNER_ID, job, make_company(), None)
        assert rule == policies.RULE_APPLY_SELF_JOB

    def test_owner_denied(self):
        rule, _ = policies.apply_denial_reason(OWNER_ID, make_job(), make_company(), None)
        assert rule == policies.RULE_APPLY_COMPANY_OWNER

    def test_owner_role_member_denied_as_recruiter(self):
        membership = make_membership(MEMBER_ID, Role.OWNER)
        rule, _ = policies.apply_denial_reason(MEMBER_ID, make_job(), make_company(), membership)
        assert rule == policies.RULE_APPLY_COMPANY_RECRUITER

    def test_recruiter_denied(self):
        job = make_job(author_id=OWNER_ID)
        membership = make_membership(RECRUITER_ID, Role.RECRUITER)
        rule, _ = policies.apply_denial_reason(RECRUITER_ID, job, make_company(), membership)
        assert rule == policies.RULE_APPLY_COMPANY_RECRUITER

    def test_plain_member_may_apply(self):
        membership = make_membership(MEMBER_ID, Role.MEMBER)
        assert policies.can_apply_to_job(MEMBER_ID, make_job(), make_company(), membership)

    def test_outsider_may_apply(self):
        assert policies.can_apply_to_job(OUTSIDER_ID, make_job(), make_company(), None)

    def test_no_company_only_checks_author(self):
        assert policies.can_apply_to_job(OWNER_ID, make_job(), None, None)
