"""Unit tests for correlation ids, structlog setup and service logging."""

import os
import re
from collections.abc import Iterator
from unittest.mock import patch

import pytest
import structlog
from structlog.testing import capture_logs

from festival.application.services.base import LoggingMixin
from festival.domain.errors.conflict import ConflictError
from festival.infrastructure.observability.correlation import (
    MAX_CORRELATION_ID_LENGTH,
    accept_correlation_id,
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)
from festival.infrastructure.observability.logging import (
    _log_level,
    configure_structlog,
)

UUID4 = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-4[0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$"
)


@pytest.fixture
def restore_structlog() -> Iterator[None]:
    yield
    structlog.reset_defaults()


class TestAcceptCorrelationId:
    def test_generated_ids_are_unique_uuid4(self) -> None:
        ids = {generate_correlation_id() for _ in range(50)}
        assert len(ids) == 50
        assert all(UUID4.match(i) for i in ids)

    @pytest.mark.parametrize("raw", ["req-42", "abc.DEF_1:2", "  padded-id  "])
    def test_well_formed_ids_are_kept(self, raw: str) -> None:
        assert accept_correlation_id(raw) == raw.strip()

    @pytest.mark.parametrize(
        "raw",
        [None, "", "   ", "has space", "line\nbreak", "x" * (MAX_CORRELATION_ID_LENGTH + 1)],
    )
    def test_malformed_ids_are_replaced(self, raw: str | None) -> None:
        assert UUID4.match(accept_correlation_id(raw))


class TestCorrelationScope:
    def test_empty_outside_a_scope(self) -> None:
        assert get_correlation_id() == ""

    def test_scope_binds_and_restores(self) -> None:
        with correlation_scope("outer"):
            with correlation_scope("inner"):
                assert get_correlation_id() == "inner"
            assert get_correlation_id() == "outer"
        assert get_correlation_id() == ""

    def test_scope_restores_after_error(self) -> None:
        with pytest.raises(RuntimeError):
            with correlation_scope("failing"):
                raise RuntimeError("boom")
        assert get_correlation_id() == ""


class TestCorrelationProcessor:
    def test_adds_current_id(self) -> None:
        with correlation_scope("req-7"):
            event = correlation_id_processor(None, "info", {"event": "x"})
        assert event["correlation_id"] == "req-7"

    def test_keeps_explicit_id(self) -> None:
        with correlation_scope("req-7"):
            event = correlation_id_processor(
                None, "info", {"event": "x", "correlation_id": "bound"}
            )
        assert event["correlation_id"] == "bound"

    def test_no_id_outside_scope(self) -> None:
        event = correlation_id_processor(None, "info", {"event": "x"})
        assert "correlation_id" not in event


@pytest.mark.usefixtures("restore_structlog")
class TestConfigureStructlog:
    def test_production_renders_json(self) -> None:
        configure_structlog(environment="production")

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert correlation_id_processor in processors

    @pytest.mark.parametrize("environment", ["development", "test"])
    def test_other_environments_render_console(self, environment: str) -> None:
        configure_structlog(environment=environment)

        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("DEBUG", 10), ("warning", 30), (" error ", 40), ("LOUD", 20)],
    )
    def test_log_level_from_environment(self, value: str, expected: int) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": value}):
            assert _log_level() == expected


class _SampleService(LoggingMixin):
    def __init__(self) -> None:
        self._init_logger(component="sample")

    def refuse(self) -> None:
        log = self._log_operation("refuse", actor_id=3)
        raise self._log_rejection(log, ConflictError("Program name already exists"))


class TestLoggingMixin:
    def test_operation_context_is_bound(self) -> None:
        with capture_logs() as logs, correlation_scope("req-9"):
            service = _SampleService()
            service._log_operation("lookup", program_id=1).info("looked_up")

        assert logs == [
            {
                "event": "looked_up",
                "log_level": "info",
                "service": "_SampleService",
                "component": "sample",
                "operation": "lookup",
                "correlation_id": "req-9",
                "program_id": 1,
            }
        ]

    def test_rejection_is_logged_and_raised(self) -> None:
        with capture_logs() as logs:
            service = _SampleService()
            with pytest.raises(ConflictError):
                service.refuse()

        assert len(logs) == 1
        entry = logs[0]
        assert entry["log_level"] == "warning"
        assert entry["event"] == "operation_rejected"
        assert entry["error_code"] == ConflictError.ERROR_CODE
        assert entry["actor_id"] == 3
        assert "already exists" in entry["detail"]
