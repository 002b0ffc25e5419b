"""Structured logging — JSON shape and idempotent setup."""

import json
import logging

import pytest

from storefront.infrastructure.observability import JSONFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    handlers = list(logging.root.handlers)
    level = logging.root.level
    yield
    logging.root.handlers[:] = handlers
    logging.root.setLevel(level)


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        "storefront.test", logging.WARNING, __file__, 1, "Checkout failed", None, None,
    )
    record.__dict__.update(extra)
    return record


def test_json_formatter_includes_known_extras_only():
    record = make_record(error_code="CART_EMPTY", sku_count=0, unrelated="x")
    payload = json.loads(JSONFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "storefront.test"
    assert payload["message"] == "Checkout failed"
    assert payload["error_code"] == "CART_EMPTY"
    assert payload["sku_count"] == 0
    assert "unrelated" not in payload
    assert "path" not in payload


def test_setup_logging_is_idempotent(restore_root_logger):
    setup_logging("debug", "json")
    setup_logging("warning", "text")

    named = [h for h in logging.root.handlers if h.get_name() == "storefront"]
    assert len(named) == 1
    assert not isinstance(named[0].formatter, JSONFormatter)
    assert logging.root.level == logging.WARNING
