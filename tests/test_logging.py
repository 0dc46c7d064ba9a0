"""Test logging setup and request-id propagation."""
import logging

from core.observability.log_setup import (
    RequestIdFilter,
    configure_logging,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def _books_handlers():
    return [h for h in logging.getLogger().handlers if getattr(h, "_books_api", False)]


def test_configure_logging_is_idempotent():
    configure_logging("INFO")
    configure_logging("DEBUG")
    assert len(_books_handlers()) == 1
    assert logging.getLogger().level == logging.DEBUG


def test_request_id_defaults_outside_request():
    assert get_request_id() == "-"


def test_filter_stamps_request_id():
    record = logging.LogRecord("books", logging.INFO, __file__, 1, "msg", None, None)
    token = set_request_id("req-1")
    try:
        assert RequestIdFilter().filter(record)
    finally:
        reset_request_id(token)
    assert record.request_id == "req-1"
    assert get_request_id() == "-"
