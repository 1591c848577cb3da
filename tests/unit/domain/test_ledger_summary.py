"""Unit tests for LedgerSummary serialization"""

from datetime import date
from decimal import Decimal

from src.domain.ledger_summary import (
    LedgerSummary,
    LedgerResolution,
    InvoiceResolution,
    OpeningBalanceResolution,
)
from tests.fixtures.factories import make_summary


class TestLedgerSummary:
    """Resolution path survives a JSON round trip through the tagged union"""

    def test_ledger_resolution_from_json(self):
        summary = make_summary("1234.50", credit_limit="2000")

        restored = LedgerSummary.model_validate_json(summary.model_dump_json())

        assert isinstance(restored.source, LedgerResolution)
        assert restored.source.entry_date == date(2024, 1, 10)
        assert restored.current_balance == Decimal("1234.50")
        assert restored == summary

    def test_invoice_resolution_from_json(self):
        summary = make_summary("800", opening_balance="200", via_ledger=False)

        restored = LedgerSummary.model_validate_json(summary.model_dump_json())

        assert isinstance(restored.source, InvoiceResolution)
        assert restored.source.invoice_total == Decimal("600")

    def test_opening_balance_resolution_from_dict(self):
        summary = LedgerSummary.model_validate(
            {
                "customer_id": "c1",
                "company_id": "co1",
                "opening_balance": "150",
                "current_balance": "150",
                "credit_limit": "0",
                "source": {"path": "opening_balance"},
                "as_of": "2023-12-31",
            }
        )

        assert isinstance(summary.source, OpeningBalanceResolution)
        assert summary.as_of == date(2023, 12, 31)

    def test_dump_includes_unlimited_flag(self):
        data = make_summary("10", credit_limit="0").model_dump()

        assert data["unlimited_credit"] is True
        assert data["source"]["path"] == "ledger"
