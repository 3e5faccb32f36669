# companies/commands.py
"""
Command layer for companies and memberships.

ALL company mutations go through CompanyLifecycle:
- Company creation (company + OWNER membership, one transaction)
- Company profile updates
- Membership management (add, re-role, remove)
- Domain verification
- Logo upload/removal

Every mutating command follows the same order:
1. Load the aggregate (NotFoundError if absent)
2. Load the actor's membership
3. Ask companies.policies (ForbiddenError on denial)
4. Validate business invariants
5. Persist and return the updated aggregate

Nothing here retries. A uniqueness race surfaces as ConflictError and
the caller decides whether to try again.
"""

import logging
import os
from typing import List, Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from companies import policies
from companies.models import Company, CompanyMembership
from companies.repositories import CompanyRepository, DjangoCompanyRepository
from companies.types import CompanyInput, CompanyPatch, MemberAction
from core import slugs
from core.errors import (
    ConflictError,
    ForbiddenError,
    InvalidInputError,
    InvalidOperationError,
    NotFoundError,
    is_unique_violation,
)
from core.storage import BlobStore, DjangoBlobStore, blob_path

logger = logging.getLogger(__name__)

Role = CompanyMembership.Role

LOGO_PREFIX = "companies"


def _deny(rule: str, reason: str, actor_id, company: Company) -> ForbiddenError:
    logger.warning(
        "Company command denied",
        extra={"rule": rule, "actor_id": actor_id, "company_id": company.pk},
    )
    return ForbiddenError(reason, rule=rule)


class CompanyLifecycle:
    def __init__(self, companies: CompanyRepository, blob_store: BlobStore):
        self.companies = companies
        self.blob_store = blob_store

    # =========================================================================
    # Reads
    # =========================================================================

    def get_by_id(self, company_id) -> Company:
        company = self.companies.find_by_id(company_id)
        if company is None:
            raise NotFoundError("Company not found.")
        return company

    def get_by_slug(self, slug: str) -> Company:
        company = self.companies.find_by_slug(slug)
        if company is None:
            raise NotFoundError("Company not found.")
        return company

    def search(self, query: str, limit: Optional[int] = None) -> List[Company]:
        limit = limit or settings.COMPANY_SEARCH_LIMIT
        return self.companies.search((query or "").strip(), limit)

    def list_managed_by(self, actor_id) -> List[Company]:
        """Companies where the actor may post jobs (owner, OWNER or RECRUITER)."""
        return self.companies.find_companies_managed_by(actor_id)

    def list_members(self, company_id) -> List[CompanyMembership]:
        company = self.get_by_id(company_id)
        return self.companies.list_members(company.pk)

    # =========================================================================
    # Company Creation
    # =========================================================================

    def create(self, actor_id, data: CompanyInput) -> Company:
        """
        Create a company owned by ``actor_id``.

        The company row and the OWNER membership for the actor are written
        in one transaction; if either insert fails neither survives.

        Raises:
            NotFoundError: ``actor_id`` is not a known user
            InvalidInputError: Name is blank or has no URL-safe characters
            ConflictError: The allocated slug was taken concurrently
        """
        name = (data.name or "").strip()
        if not name:
            raise InvalidInputError("Company name is required.")
        self._require_user(actor_id)

        slug = slugs.allocate(name, self.companies.slug_exists)

        try:
            with transaction.atomic():
                company = self.companies.create(
                    slug=slug,
                    name=name,
                    owner_id=actor_id,
                    description=data.description or "",
                    website_url=data.website_url or "",
                    location=data.location or "",
                    size=data.size or "",
                )
                self.companies.add_member(company.pk, actor_id, Role.OWNER)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise ConflictError(
                f"Company slug '{slug}' is already taken. Please retry."
            ) from exc

        logger.info(
            "Company created",
            extra={"company_id": company.pk, "slug": slug, "owner_id": actor_id},
        )
        return company

    # =========================================================================
    # Company Updates
    # =========================================================================

    def update(self, actor_id, company_id, patch: CompanyPatch) -> Company:
        company = self.get_by_id(company_id)
        membership = self.companies.find_member(company.pk, actor_id)

        if not policies.can_manage_company(actor_id, company, membership):
            raise _deny(
                policies.RULE_MANAGE_COMPANY,
                "Only the company owner can update this company.",
                actor_id,
                company,
            )

        changes = patch.changes()
        if "name" in changes:
            changes["name"] = (changes["name"] or "").strip()
            if not changes["name"]:
                raise InvalidInputError("Company name cannot be blank.")
        for field in ("description", "website_url", "location", "size"):
            if field in changes and changes[field] is None:
                changes[field] = ""

        changes = {
            field: value
            for field, value in changes.items()
            if getattr(company, field) != value
        }
        if not changes:
            return company

        company = self.companies.update(company, changes)
        logger.info(
            "Company updated",
            extra={"company_id": company.pk, "actor_id": actor_id, "fields": sorted(changes)},
        )
        return company

    # =========================================================================
    # Membership Management
    # =========================================================================

    def manage_member(
        self,
        actor_id,
        company_id,
        target_user_id,
        action,
        role: Optional[str] = None,
    ) -> Optional[CompanyMembership]:
        """
        Add, re-role or remove a member.

        Returns:
            The membership for ADD and UPDATE_ROLE, None for REMOVE

        Rules:
        - Only the owner of record or an OWNER member may manage members
        - The owner of record can never be removed (InvalidOperationError,
          whoever asks)
        - ADD defaults to MEMBER; an unknown user is NotFoundError, an
          existing member is a conflict
        - UPDATE_ROLE overwrites the role as given. Changing the owner's
          own role is allowed but logged at WARNING.
        """
        try:
            action = MemberAction(action)
        except ValueError:
            raise InvalidInputError(
                f"Invalid action '{action}'. Must be one of: {[a.value for a in MemberAction]}"
            )
        if role is not None and role not in Role.values:
            raise InvalidInputError(f"Invalid role. Must be one of: {Role.values}")

        company = self.get_by_id(company_id)

        if action == MemberAction.REMOVE and target_user_id == company.owner_id:
            raise InvalidOperationError("The company owner cannot be removed.")

        membership = self.companies.find_member(company.pk, actor_id)
        if not policies.can_manage_members(actor_id, company, membership):
            raise _deny(
                policies.RULE_MANAGE_MEMBERS,
                "Only company owners can manage members.",
                actor_id,
                company,
            )

        if action == MemberAction.ADD:
            return self._add_member(company, target_user_id, role or Role.MEMBER, actor_id)
        if action == MemberAction.UPDATE_ROLE:
            return self._update_member_role(company, target_user_id, role, actor_id)
        self._remove_member(company, target_user_id, actor_id)
        return None

    def _add_member(self, company: Company, user_id, role: str, actor_id) -> CompanyMembership:
        self._require_user(user_id)
        if self.companies.find_member(company.pk, user_id) is not None:
            raise ConflictError("User is already a member of this company.")
        try:
            with transaction.atomic():
                membership = self.companies.add_member(company.pk, user_id, role)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise ConflictError("User is already a member of this company.") from exc

        logger.info(
            "Member added",
            extra={"company_id": company.pk, "user_id": user_id, "role": role, "actor_id": actor_id},
        )
        return membership

    def _update_member_role(self, company: Company, user_id, role: Optional[str], actor_id) -> CompanyMembership:
        if role is None:
            raise InvalidInputError("A role is required for UPDATE_ROLE.")

        membership = self.companies.update_member_role(company.pk, user_id, role)
        if membership is None:
            raise NotFoundError("Membership not found.")

        if user_id == company.owner_id and role != Role.OWNER:
            logger.warning(
                "Owner membership role changed",
                extra={"company_id": company.pk, "owner_id": user_id, "role": role, "actor_id": actor_id},
            )
        else:
            logger.info(
                "Member role updated",
                extra={"company_id": company.pk, "user_id": user_id, "role": role, "actor_id": actor_id},
            )
        return membership

    def _remove_member(self, company: Company, user_id, actor_id) -> None:
        if not self.companies.remove_member(company.pk, user_id):
            raise NotFoundError("Membership not found.")
        logger.info(
            "Member removed",
            extra={"company_id": company.pk, "user_id": user_id, "actor_id": actor_id},
        )

    # =========================================================================
    # Domain Verification
    # =========================================================================

    def verify_domain(self, actor_id, company_id, email: str) -> Company:
        """
        Mark the company DOMAIN_VERIFIED using the domain of ``email``.

        Authorized like job management (owner or recruiter). The tier never
        goes back down: verifying again with another email keeps the tier
        and replaces ``verified_domain``.
        """
        company = self.get_by_id(company_id)
        self._require_job_manager(actor_id, company, "You do not have permission to verify this company.")

        domain = extract_domain(email)
        previous_domain = company.verified_domain
        was_verified = company.verification_tier == Company.VerificationTier.DOMAIN_VERIFIED

        company = self.companies.update(company, {
            "verification_tier": Company.VerificationTier.DOMAIN_VERIFIED,
            "verified_domain": domain,
            "is_verified": True,
        })

        if was_verified and previous_domain != domain:
            logger.info(
                "Company verified domain replaced",
                extra={"company_id": company.pk, "old_domain": previous_domain, "new_domain": domain},
            )
        else:
            logger.info(
                "Company domain verified",
                extra={"company_id": company.pk, "domain": domain, "actor_id": actor_id},
            )
        return company

    # =========================================================================
    # Logo
    # =========================================================================

    def upload_logo(self, actor_id, company_id, logo_file) -> Company:
        """
        Store a new logo and point the company at it.

        An existing logo blob is deleted before the new reference is saved.
        """
        company = self.get_by_id(company_id)
        self._require_job_manager(actor_id, company, "You do not have permission to change this company's logo.")

        ext = os.path.splitext(getattr(logo_file, "name", "") or "")[1].lower()
        allowed = settings.COMPANY_LOGO_EXTENSIONS
        if ext not in allowed:
            raise InvalidInputError(f"Invalid file type. Allowed: {', '.join(allowed)}")

        max_size = settings.COMPANY_LOGO_MAX_BYTES
        if getattr(logo_file, "size", 0) > max_size:
            raise InvalidInputError(f"File too large. Maximum size is {max_size // (1024 * 1024)}MB.")

        if company.logo_url:
            self.blob_store.delete(company.logo_url)

        url = self.blob_store.upload(logo_file, blob_path(LOGO_PREFIX, ext))
        company = self.companies.update(company, {"logo_url": url})
        logger.info("Company logo uploaded", extra={"company_id": company.pk, "logo_url": url})
        return company

    def remove_logo(self, actor_id, company_id) -> Company:
        company = self.get_by_id(company_id)
        self._require_job_manager(actor_id, company, "You do not have permission to change this company's logo.")

        if not company.logo_url:
            raise InvalidOperationError("No logo to delete.")

        self.blob_store.delete(company.logo_url)
        company = self.companies.update(company, {"logo_url": None})
        logger.info("Company logo removed", extra={"company_id": company.pk})
        return company

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require_user(self, user_id) -> None:
        if not self.companies.user_exists(user_id):
            raise NotFoundError("User not found.")

    def _require_job_manager(self, actor_id, company: Company, reason: str) -> None:
        membership = self.companies.find_member(company.pk, actor_id)
        if not policies.can_post_or_manage_jobs(actor_id, company, membership):
            raise _deny(policies.RULE_MANAGE_JOBS, reason, actor_id, company)


def extract_domain(email: str) -> str:
    """
    Domain part of ``email`` (text after the last '@'), lowercased.

    Raises:
        InvalidInputError: No '@' or nothing after it
    """
    email = (email or "").strip()
    _, at, domain = email.rpartition("@")
    domain = domain.strip().lower()
    if not at or not domain:
        raise InvalidInputError("Enter a valid company email.")
    return domain


def build_company_lifecycle() -> CompanyLifecycle:
    """CompanyLifecycle wired to the ORM repositories and default storage."""
    return CompanyLifecycle(DjangoCompanyRepository(), DjangoBlobStore())
