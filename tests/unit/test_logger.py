"""
Unit tests for structured logging.
"""
import json
import logging
from decimal import Decimal

from pkg.logger.logger import (
    StructuredFormatter,
    get_logger,
    get_request_id,
    set_request_id,
)


def make_record(**fields) -> logging.LogRecord:
    record = logging.LogRecord("test", logging.INFO, __file__, 10, "Payment refunded", (), None)
    record.__dict__.update(fields)
    return record


class TestStructuredFormatter:
    """Tests for StructuredFormatter."""

    def test_formats_fields_as_json(self):
        set_request_id("req-1")
        try:
            line = StructuredFormatter(service="payment-service").format(
                make_record(payment_id=10, errors=["uno"])
            )
        finally:
            set_request_id(None)

        data = json.loads(line)
        assert data["message"] == "Payment refunded"
        assert data["service"] == "payment-service"
        assert data["request_id"] == "req-1"
        assert data["payment_id"] == 10
        assert data["errors"] == ["uno"]

    def test_non_json_values_are_stringified(self):
        data = json.loads(
            StructuredFormatter(service="s").format(make_record(amount=Decimal("1.50")))
        )

        assert data["amount"] == "1.50"


class TestStructuredLogger:
    """Tests for keyword fields on StructuredLogger."""

    def test_keyword_fields_reach_the_record(self, caplog):
        logger = get_logger("tests.structured")

        with caplog.at_level(logging.INFO, logger="tests.structured"):
            logger.info("Product created", product_id=5, sku="SKU123")

        record = caplog.records[-1]
        assert record.product_id == 5
        assert record.sku == "SKU123"

    def test_reserved_names_are_prefixed(self, caplog):
        logger = get_logger("tests.structured")

        with caplog.at_level(logging.INFO, logger="tests.structured"):
            logger.info("Category created", name="Hogar")

        assert caplog.records[-1].field_name == "Hogar"
        assert caplog.records[-1].name == "tests.structured"

    def test_request_id_context(self):
        set_request_id("abc")

        assert get_request_id() == "abc"
        set_request_id(None)
