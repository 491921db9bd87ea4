"""Tests for the log formatter and workflow log helpers."""

import logging

import pytest
from httpx import AsyncClient, ASGITransport

from zenith.core import logging as zlog
from zenith.core.config import settings
from zenith.core.exceptions import ZenithError
from zenith.main import create_application


def _record(name: str, msg: str, level: int = logging.INFO) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


def test_formatter_without_colour_has_plain_columns():
    line = zlog.ZenithFormatter(colour=False).format(
        _record("zenith.services.listing_service", "hello")
    )

    assert "\033[" not in line
    assert line.endswith("│ hello")
    assert "INFO    │ listing_service    │" in line


def test_formatter_with_colour_wraps_level():
    line = zlog.ZenithFormatter(colour=True).format(_record("zenith.main", "boom", logging.ERROR))

    assert "\033[91mERROR  \033[0m" in line


def test_health_probe_lines_are_filtered():
    f = zlog._HealthCheckFilter()

    assert f.filter(_record("uvicorn.access", '127.0.0.1 - "GET /api/v1/health HTTP/1.1" 200')) is False
    assert f.filter(_record("uvicorn.access", '127.0.0.1 - "GET /api/v1/health HTTP/1.1" 503')) is True
    assert f.filter(_record("uvicorn.access", '127.0.0.1 - "GET /api/v1/products HTTP/1.1" 200')) is True


def test_log_transition_message(caplog, monkeypatch):
    monkeypatch.setattr(settings, "LOG_COLOUR", False)
    logger = logging.getLogger("zenith.test")

    with caplog.at_level(logging.INFO, logger="zenith.test"):
        zlog.log_transition(logger, "listing", 12, "pending", "active", actor_id=1)
        zlog.log_transition(logger, "listing", 12, "active", "sold")

    assert caplog.messages == [
        "  ✓ listing #12 pending → active (admin #1)",
        "  ✓ listing #12 active → sold",
    ]


def test_log_fail_message(caplog, monkeypatch):
    monkeypatch.setattr(settings, "LOG_COLOUR", False)
    logger = logging.getLogger("zenith.test")

    with caplog.at_level(logging.INFO, logger="zenith.test"):
        zlog.log_fail(logger, "payment gateway unreachable")

    assert caplog.records[0].levelno == logging.ERROR
    assert caplog.messages == ["  ✗ payment gateway unreachable"]


@pytest.mark.asyncio
async def test_server_side_domain_error_logged_as_failure(caplog, monkeypatch):
    monkeypatch.setattr(settings, "LOG_COLOUR", False)
    app = create_application()

    @app.get("/boom")
    async def boom():
        raise ZenithError("Ledger unavailable")

    transport = ASGITransport(app=app)
    with caplog.at_level(logging.INFO, logger="zenith.main"):
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"detail": "Ledger unavailable", "error_code": "internal_error"}
    failures = [r for r in caplog.records if r.name == "zenith.main" and r.levelno == logging.ERROR]
    assert failures[0].getMessage().startswith("  ✗ GET /boom -> 500 internal_error: Ledger unavailable")
