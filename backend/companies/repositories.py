# companies/repositories.py
"""
Company and membership persistence.

CompanyRepository is the interface the commands are written against;
DjangoCompanyRepository is the ORM-backed implementation.

Uniqueness (company slug, one membership per (company, user)) is
enforced by database constraints. Violations propagate as
``django.db.IntegrityError``; the commands translate unique violations
into ConflictError. Users are checked with ``user_exists`` before any
insert that references one.
"""

from typing import List, Optional, Protocol

from django.contrib.auth import get_user_model
from django.db.models import Q

from companies.models import Company, CompanyMembership


class CompanyRepository(Protocol):
    def create(self, **fields) -> Company: ...

    def find_by_id(self, company_id) -> Optional[Company]: ...

    def find_by_slug(self, slug: str) -> Optional[Company]: ...

    def slug_exists(self, slug: str) -> bool: ...

    def update(self, company: Company, changes: dict) -> Company: ...

    def add_member(self, company_id, user_id, role: str) -> CompanyMembership: ...

    def find_member(self, company_id, user_id) -> Optional[CompanyMembership]: ...

    def update_member_role(self, company_id, user_id, role: str) -> Optional[CompanyMembership]: ...

    def remove_member(self, company_id, user_id) -> bool: ...

    def list_members(self, company_id) -> List[CompanyMembership]: ...

    def find_companies_managed_by(self, user_id) -> List[Company]: ...

    def search(self, query: str, limit: int) -> List[Company]: ...

    def user_exists(self, user_id) -> bool: ...


class DjangoCompanyRepository:
    def create(self, **fields) -> Company:
        return Company.objects.create(**fields)

    def find_by_id(self, company_id) -> Optional[Company]:
        return Company.objects.filter(pk=company_id).first()

    def find_by_slug(self, slug: str) -> Optional[Company]:
        return Company.objects.filter(slug=slug).first()

    def slug_exists(self, slug: str) -> bool:
        return Company.objects.filter(slug=slug).exists()

    def update(self, company: Company, changes: dict) -> Company:
        if not changes:
            return company
        for field, value in changes.items():
            setattr(company, field, value)
        company.save(update_fields=[*changes.keys(), "updated_at"])
        return company

    # -------------------------------------------------------------------------
    # Memberships
    # -------------------------------------------------------------------------

    def add_member(self, company_id, user_id, role: str) -> CompanyMembership:
        return CompanyMembership.objects.create(
            company_id=company_id,
            user_id=user_id,
            role=role,
        )

    def find_member(self, company_id, user_id) -> Optional[CompanyMembership]:
        if company_id is None or user_id is None:
            return None
        return CompanyMembership.objects.filter(
            company_id=company_id,
            user_id=user_id,
        ).first()

    def update_member_role(self, company_id, user_id, role: str) -> Optional[CompanyMembership]:
        membership = self.find_member(company_id, user_id)
        if membership is None:
            return None
        membership.role = role
        membership.save(update_fields=["role", "updated_at"])
        return membership

    def remove_member(self, company_id, user_id) -> bool:
        deleted, _ = CompanyMembership.objects.filter(
            company_id=company_id,
            user_id=user_id,
        ).delete()
        return deleted > 0

    def list_members(self, company_id) -> List[CompanyMembership]:
        return list(
            CompanyMembership.objects.select_related("user")
            .filter(company_id=company_id)
            .order_by("created_at", "id")
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def find_companies_managed_by(self, user_id) -> List[Company]:
        """Companies the user owns or holds an OWNER/RECRUITER role in."""
        managed_roles = [CompanyMembership.Role.OWNER, CompanyMembership.Role.RECRUITER]
        return list(
            Company.objects.filter(
                Q(owner_id=user_id)
                | Q(memberships__user_id=user_id, memberships__role__in=managed_roles)
            )
            .distinct()
            .order_by("name")
        )

    def search(self, query: str, limit: int) -> List[Company]:
        return list(
            Company.objects.filter(name__icontains=query).order_by("name")[:limit]
        )

    def user_exists(self, user_id) -> bool:
        if user_id is None:
            return False
        return get_user_model().objects.filter(pk=user_id).exists()
