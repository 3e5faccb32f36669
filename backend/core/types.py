# core/types.py
"""
Helpers for command payload dataclasses.

Patch dataclasses default every field to UNSET so "not provided" and
"set to None" stay distinguishable.
"""

from dataclasses import fields


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "UNSET"


UNSET = _Unset()


class PatchMixin:
    """Adds ``changes()`` to a dataclass whose fields default to UNSET."""

    def changes(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }
