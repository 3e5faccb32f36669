# tests/test_logging.py
"""
Tests for the structured logging configuration.
"""

import json
import logging

from django.db import IntegrityError

from core.errors import ForbiddenError, NotFoundError, is_unique_violation
from ops.logging_config import APP_LOGGERS, JsonFormatter, get_logging_config


def make_record(**extra):
    record = logging.LogRecord(
        name="companies.commands",
        level=logging.WARNING,
        pathname=__file__,
        lineno=1,
        msg="Company command denied",
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_core_fields(self):
        entry = json.loads(JsonFormatter().format(make_record()))

        assert entry["level"] == "WARNING"
        assert entry["logger"] == "companies.commands"
        assert entry["message"] == "Company command denied"
        assert entry["timestamp"].endswith("Z")

    def test_extra_fields(self):
        entry = json.loads(JsonFormatter().format(make_record(rule="company.manage", actor_id=7)))

        assert entry["extra"] == {"rule": "company.manage", "actor_id": 7}

    def test_unserializable_extra_is_stringified(self):
        entry = json.loads(JsonFormatter().format(make_record(payload={1, 2})))

        assert isinstance(entry["extra"]["payload"], str)


class TestLoggingConfig:
    def test_json_by_default_outside_debug(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        config = get_logging_config(debug=False)

        assert config["handlers"]["console"]["formatter"] == "json"
        assert config["loggers"][""]["level"] == "INFO"

    def test_console_in_debug(self, monkeypatch):
        monkeypatch.delenv("LOG_FORMAT", raising=False)
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        config = get_logging_config(debug=True)

        assert config["handlers"]["console"]["formatter"] == "verbose"
        assert config["loggers"][""]["level"] == "DEBUG"

    def test_app_loggers_configured(self):
        config = get_logging_config()

        for name in APP_LOGGERS:
            assert config["loggers"][name]["propagate"] is True


class TestErrorPayloads:
    def test_forbidden_carries_rule(self):
        error = ForbiddenError("Only company owners can manage members.", rule="company.manage_members")

        assert error.to_dict() == {
            "kind": "forbidden",
            "reason": "Only company owners can manage members.",
            "rule": "company.manage_members",
        }

    def test_unique_violation_detected_from_message(self):
        assert is_unique_violation(IntegrityError("UNIQUE constraint failed: companies_company.slug"))
        assert not is_unique_violation(IntegrityError("FOREIGN KEY constraint failed"))

    def test_unique_violation_detected_from_sqlstate(self):
        class DriverError(Exception):
            def __init__(self, sqlstate):
                super().__init__("driver error")
                self.sqlstate = sqlstate

        unique = IntegrityError("duplicate key")
        unique.__cause__ = DriverError("23505")
        foreign_key = IntegrityError("violates constraint")
        foreign_key.__cause__ = DriverError("23503")

        assert is_unique_violation(unique)
        assert not is_unique_violation(foreign_key)

    def test_not_found(self):
        assert NotFoundError("Job not found.").to_dict() == {"kind": "not_found", "reason": "Job not found."}
