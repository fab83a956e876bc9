"""Tests for the structured logging system (ledger_kernel/logging_config.py)."""

import json
import logging
from datetime import UTC, datetime
from decimal import Decimal
from io import StringIO

import pytest

from ledger_kernel.exceptions import InsufficientFundsError
from ledger_kernel.logging_config import (
    LOGGER_NAME,
    LogContext,
    StructuredFormatter,
    configure_logging,
    get_logger,
)


def _detach_handlers() -> None:
    kernel_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(kernel_logger.handlers):
        kernel_logger.removeHandler(handler)


@pytest.fixture(autouse=True)
def _clean_logging():
    """Start each test with an unconfigured kernel logger."""
    _detach_handlers()
    yield
    _detach_handlers()
    configure_logging(level=logging.DEBUG, stream=StringIO())


def _make_handler() -> tuple[logging.Handler, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    return handler, stream


def _parse_log(stream: StringIO) -> dict:
    """Parse the first JSON log line from a stream."""
    line = stream.getvalue().strip().split("\n")[0]
    return json.loads(line)


def _parse_all_logs(stream: StringIO) -> list[dict]:
    lines = stream.getvalue().strip().split("\n")
    return [json.loads(line) for line in lines if line]


# ---------------------------------------------------------------------------
# StructuredFormatter tests
# ---------------------------------------------------------------------------


class TestStructuredFormatter:
    """Tests for JSON log output format."""

    def test_basic_json_output(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("hello")

        record = _parse_log(stream)
        assert record["level"] == "INFO"
        assert record["message"] == "hello"
        assert record["logger"] == "ledger_kernel.test"
        assert "ts" in record

    def test_extra_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("job_paid", extra={"client_id": 1, "contractor_id": 6})

        record = _parse_log(stream)
        assert record["client_id"] == 1
        assert record["contractor_id"] == 6

    def test_decimal_and_datetime_serialized(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        paid_at = datetime(2020, 8, 15, 19, 11, tzinfo=UTC)
        get_logger("test").info(
            "job_paid", extra={"price": Decimal("201.00"), "payment_date": paid_at}
        )

        record = _parse_log(stream)
        assert record["price"] == "201.00"
        assert record["payment_date"] == paid_at.isoformat()

    def test_context_fields_included(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        with LogContext.bind(operation="pay_job", profile_id=1):
            get_logger("test").info("test_msg")

        record = _parse_log(stream)
        assert record["operation"] == "pay_job"
        assert record["profile_id"] == "1"

    def test_kernel_exception_fields_extracted(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        try:
            raise InsufficientFundsError(4, 5, Decimal("1.3"), Decimal("200"))
        except InsufficientFundsError:
            get_logger("test").error("payment_failed", exc_info=True)

        record = _parse_log(stream)
        assert record["exc_code"] == "INSUFFICIENT_FUNDS"
        assert record["exc_type"] == "InsufficientFundsError"
        assert record["exc_job_id"] == 5
        assert record["exc_balance"] == "1.3"
        assert "traceback" in record

    def test_no_context_fields_when_empty(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        get_logger("test").info("bare_message")

        record = _parse_log(stream)
        assert "operation" not in record
        assert "job_id" not in record

    def test_debug_filtered_at_info(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler)
        logger = get_logger("test")
        logger.info("first")
        logger.warning("second", extra={"k": "v"})
        logger.debug("third")

        logs = _parse_all_logs(stream)
        assert [r["message"] for r in logs] == ["first", "second"]


# ---------------------------------------------------------------------------
# LogContext tests
# ---------------------------------------------------------------------------


class TestLogContext:
    """Tests for context propagation."""

    def test_empty_outside_a_bind(self):
        assert LogContext.current() == {}

    def test_bind_stringifies_ids(self):
        with LogContext.bind(profile_id=1, job_id=2):
            assert LogContext.current() == {"profile_id": "1", "job_id": "2"}
        assert LogContext.current() == {}

    def test_nested_bind_restores_outer_values(self):
        with LogContext.bind(operation="deposit", profile_id=1):
            with LogContext.bind(operation="pay_job", job_id=2):
                assert LogContext.current() == {
                    "operation": "pay_job",
                    "profile_id": "1",
                    "job_id": "2",
                }
            assert LogContext.current() == {"operation": "deposit", "profile_id": "1"}

    def test_none_leaves_field_unchanged(self):
        with LogContext.bind(profile_id=1):
            with LogContext.bind(profile_id=None):
                assert LogContext.current() == {"profile_id": "1"}

    def test_unknown_field_rejected(self):
        with pytest.raises(TypeError, match="correlation_id"):
            with LogContext.bind(correlation_id="abc"):
                pass

    def test_restored_when_block_raises(self):
        with pytest.raises(RuntimeError):
            with LogContext.bind(operation="pay_job"):
                raise RuntimeError("boom")
        assert LogContext.current() == {}


# ---------------------------------------------------------------------------
# configure_logging tests
# ---------------------------------------------------------------------------


class TestConfigureLogging:
    def test_idempotent(self):
        h1, _ = _make_handler()
        configure_logging(handler=h1)
        h2, _ = _make_handler()
        configure_logging(handler=h2)
        assert len(logging.getLogger("ledger_kernel").handlers) == 1

    def test_get_logger_returns_child(self):
        assert get_logger("services.payment").name == "ledger_kernel.services.payment"

    def test_level_by_name(self):
        handler, stream = _make_handler()
        configure_logging(handler=handler, level="DEBUG")
        get_logger("deep.nested").debug("hierarchy_test")

        record = _parse_log(stream)
        assert record["logger"] == "ledger_kernel.deep.nested"
