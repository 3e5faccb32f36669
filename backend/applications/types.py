# applications/types.py
"""Payloads accepted by ApplicationLifecycle."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ApplicationInput:
    job_id: int
    cover_letter: str = ""
    resume_url: Optional[str] = None
