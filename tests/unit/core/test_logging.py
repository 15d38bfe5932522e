"""Unit tests for logging helpers."""

import structlog

from quillbase.core.logging import (
    NO_CORRELATION_ID,
    add_correlation_id,
    bind_correlation_id,
    clear_context,
    rename_message_field,
)


def test_add_correlation_id_outside_request():
    event = add_correlation_id(None, "info", {"event": "x"})
    assert event["correlation_id"] == NO_CORRELATION_ID


def test_add_correlation_id_keeps_bound_one():
    event = add_correlation_id(None, "info", {"event": "x", "correlation_id": "cid_abc"})
    assert event["correlation_id"] == "cid_abc"


def test_bind_and_clear_context():
    bind_correlation_id("cid_req1")
    assert structlog.contextvars.get_contextvars()["correlation_id"] == "cid_req1"

    clear_context()
    assert "correlation_id" not in structlog.contextvars.get_contextvars()


def test_rename_message_field():
    assert rename_message_field(None, "info", {"event": "Saved"}) == {"message": "Saved"}
