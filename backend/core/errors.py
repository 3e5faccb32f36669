# core/errors.py
"""
Error taxonomy shared by the company, job and application commands.

Every error carries a stable ``kind`` plus a human-readable ``reason``.
Callers (views, tasks) map the kind to whatever status their transport
needs; nothing in here knows about HTTP.

Kinds:
- not_found:          referenced entity is absent
- forbidden:          authorization denied (always names the failed rule)
- invalid_operation:  well-formed request that breaks a business invariant
- conflict:           uniqueness violation (duplicate application, slug race)
- invalid_input:      malformed payload (e.g. email without a domain)
"""

from typing import Optional

from django.core.exceptions import PermissionDenied


class DomainError(Exception):
    """Base class for all lifecycle failures."""

    kind = "error"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)

    def to_dict(self) -> dict:
        return {"kind": self.kind, "reason": self.reason}


class NotFoundError(DomainError):
    kind = "not_found"


class ForbiddenError(DomainError, PermissionDenied):
    """
    Authorization denied.

    Also a Django ``PermissionDenied`` so request handlers that already
    translate that exception keep working unchanged.
    """

    kind = "forbidden"

    def __init__(self, reason: str, rule: Optional[str] = None):
        self.rule = rule
        super().__init__(reason)

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["rule"] = self.rule
        return data


class InvalidOperationError(DomainError):
    kind = "invalid_operation"


class ConflictError(DomainError):
    kind = "conflict"


class InvalidInputError(DomainError):
    kind = "invalid_input"


UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: Exception) -> bool:
    """
    True when ``exc`` (a ``django.db.IntegrityError``) came from a unique
    constraint rather than a foreign key, NOT NULL or check constraint.

    PostgreSQL drivers expose the SQLSTATE on the wrapped error; SQLite
    only says so in the message ("UNIQUE constraint failed: ...").
    """
    cause = exc.__cause__
    sqlstate = getattr(cause, "sqlstate", None) or getattr(cause, "pgcode", None)
    if sqlstate:
        return sqlstate == UNIQUE_VIOLATION_SQLSTATE
    return "unique" in str(exc).lower()
