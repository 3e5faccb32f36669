# jobs/types.py
"""Payloads accepted by JobLifecycle."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from core.types import UNSET, PatchMixin


@dataclass(frozen=True)
class JobInput:
    company_id: int
    title: str
    description: str
    type: str = "FULL_TIME"
    workplace: str = "ON_SITE"
    location: str = ""
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    currency: Optional[str] = None
    apply_link: str = ""
    expires_at: Optional[datetime] = None
    topics: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class JobPatch(PatchMixin):
    """
    Partial job update. Only fields that are set are written.

    ``company_id`` and ``slug`` are fixed at creation. ``topics`` replaces
    the whole topic set when given.
    """
    title: Any = UNSET
    description: Any = UNSET
    type: Any = UNSET
    workplace: Any = UNSET
    location: Any = UNSET
    salary_min: Any = UNSET
    salary_max: Any = UNSET
    currency: Any = UNSET
    apply_link: Any = UNSET
    expires_at: Any = UNSET
    is_active: Any = UNSET
    topics: Any = UNSET


@dataclass(frozen=True)
class JobFilter:
    company_id: Optional[int] = None
    is_active: bool = True
    query: str = ""
    type: Optional[str] = None
    workplace: Optional[str] = None
    skip: int = 0
    take: Optional[int] = None


@dataclass(frozen=True)
class JobPage:
    jobs: list
    total: int
