# companies/types.py
"""
Payloads accepted by CompanyLifecycle.

These are already validated by the request layer; the commands only
re-check what business rules depend on.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from core.types import UNSET, PatchMixin


@dataclass(frozen=True)
class CompanyInput:
    """New company profile. No logo: that goes through upload_logo."""
    name: str
    description: str = ""
    website_url: str = ""
    location: str = ""
    size: str = ""


@dataclass(frozen=True)
class CompanyPatch(PatchMixin):
    """
    Partial company update. Only fields that are set are written.

    ``slug`` is immutable and the logo goes through upload_logo/remove_logo,
    so neither is patchable.
    """
    name: Any = UNSET
    description: Any = UNSET
    website_url: Any = UNSET
    location: Any = UNSET
    size: Any = UNSET


class MemberAction(str, Enum):
    ADD = "ADD"
    REMOVE = "REMOVE"
    UPDATE_ROLE = "UPDATE_ROLE"
