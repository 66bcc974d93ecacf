"""Tests for logging configuration and telemetry setup."""

import logging

import pytest
import structlog

from blog_admin_client import telemetry
from blog_admin_client.telemetry import add_trace_context, configure_logging, init_telemetry


def test_configure_logging_routes_stdlib_through_structlog() -> None:
    configure_logging("debug")

    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert root.level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING
    structlog.reset_defaults()


def test_unknown_level_falls_back_to_info() -> None:
    configure_logging("chatty")
    assert logging.getLogger().level == logging.INFO
    structlog.reset_defaults()


def test_init_telemetry_noop_without_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OTEL_EXPORTER_OTLP_ENDPOINT", raising=False)
    init_telemetry()
    assert telemetry._initialized is False


def test_trace_context_absent_without_span() -> None:
    event = add_trace_context(None, "info", {"event": "x"})
    assert "trace_id" not in event
