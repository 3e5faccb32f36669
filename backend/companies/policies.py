# companies/policies.py
"""
Authorization policies for companies, jobs and job applications.

Policies answer: "May this actor do this, given the current state?"
They do NOT load anything and do NOT perform the action. Commands load
the company, job and membership first and pass them in, so every rule
here can be tested with unsaved model instances.

This is the single definition of the "owner or recruiter" style checks.
companies/commands.py, jobs/commands.py and applications/commands.py all
ask these functions instead of comparing roles inline.

Membership handling:
    ``membership`` may be None (the actor is not a member). That is
    treated exactly like a MEMBER row: no elevated rights, never an error.

Rule names (carried by ForbiddenError.rule):
    company.manage, company.manage_members, jobs.manage,
    jobs.view_applications, jobs.apply.self_job,
    jobs.apply.company_owner, jobs.apply.company_recruiter,
    jobs.company_unverified
"""

from typing import Optional, Tuple

from companies.models import Company, CompanyMembership

Role = CompanyMembership.Role

RULE_MANAGE_COMPANY = "company.manage"
RULE_MANAGE_MEMBERS = "company.manage_members"
RULE_MANAGE_JOBS = "jobs.manage"
RULE_VIEW_APPLICATIONS = "jobs.view_applications"
RULE_APPLY_SELF_JOB = "jobs.apply.self_job"
RULE_APPLY_COMPANY_OWNER = "jobs.apply.company_owner"
RULE_APPLY_COMPANY_RECRUITER = "jobs.apply.company_recruiter"
RULE_COMPANY_UNVERIFIED = "jobs.company_unverified"

JOB_MANAGER_ROLES = frozenset({Role.OWNER.value, Role.RECRUITER.value})


def _role(membership: Optional[CompanyMembership]) -> str:
    if membership is None:
        return Role.MEMBER.value
    return str(membership.role)


def _is_owner(actor_id, company: Optional[Company]) -> bool:
    return company is not None and company.owner_id == actor_id


# =============================================================================
# Company Policies
# =============================================================================

def can_manage_company(actor_id, company: Company, membership: Optional[CompanyMembership]) -> bool:
    """Owner of record, or anyone holding the OWNER role."""
    return _is_owner(actor_id, company) or _role(membership) == Role.OWNER


def can_manage_members(actor_id, company: Company, membership: Optional[CompanyMembership]) -> bool:
    """
    Add, remove or re-role members.

    Stricter than job management: a RECRUITER may post jobs but may not
    touch the member list.
    """
    return _is_owner(actor_id, company) or _role(membership) == Role.OWNER


# =============================================================================
# Job Policies
# =============================================================================

def can_post_or_manage_jobs(actor_id, company: Company, membership: Optional[CompanyMembership]) -> bool:
    """
    Owner of record, or OWNER/RECRUITER role.

    Also gates domain verification and logo changes.
    """
    return _is_owner(actor_id, company) or _role(membership) in JOB_MANAGER_ROLES


def can_view_job_applications(actor_id, job, company: Optional[Company], membership: Optional[CompanyMembership]) -> bool:
    """The job's author, or anyone who may manage the company's jobs."""
    if job.author_id == actor_id:
        return True
    if company is None:
        return False
    return can_post_or_manage_jobs(actor_id, company, membership)


# =============================================================================
# Application Policies
# =============================================================================

def apply_denial_reason(
    actor_id,
    job,
    company: Optional[Company],
    membership: Optional[CompanyMembership],
) -> Optional[Tuple[str, str]]:
    """
    Explain why ``actor_id`` may not apply to ``job``.

    Returns:
        None if applying is allowed
        (rule, reason) for the first rule that fails

    Rules, in order:
    - The job's author cannot apply to their own posting
    - The company owner cannot apply to their company's jobs
    - OWNER/RECRUITER members cannot apply to their company's jobs
    """
    if job.author_id == actor_id:
        return RULE_APPLY_SELF_JOB, "You cannot apply to your own job posting."

    if company is not None:
        if company.owner_id == actor_id:
            return RULE_APPLY_COMPANY_OWNER, "As the company owner, you cannot apply to this job."
        if _role(membership) in JOB_MANAGER_ROLES:
            return RULE_APPLY_COMPANY_RECRUITER, "Recruiters cannot apply to their company's jobs."

    return None


def can_apply_to_job(actor_id, job, company: Optional[Company], membership: Optional[CompanyMembership]) -> bool:
    return apply_denial_reason(actor_id, job, company, membership) is None
