"""Unit tests for InvoiceAggregator"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock

from src.app.repositories.errors import StoreUnavailableError
from src.app.use_cases.ledger.aggregate_invoices import InvoiceAggregator
from src.domain.sales_document import DocumentStatus, DocumentType
from tests.fixtures.factories import COMPANY_ID, CUSTOMER_ID, make_invoice


@pytest.fixture
def mock_document_repo():
    return AsyncMock()


@pytest.fixture
def aggregator(mock_document_repo):
    return InvoiceAggregator(mock_document_repo)


@pytest.mark.asyncio
class TestInvoiceAggregator:
    """Outstanding totals over a customer's invoices"""

    async def test_sums_outstanding_amounts(self, aggregator, mock_document_repo):
        """
        Given: Invoices with explicit and derived outstanding amounts
        When: Outstanding total is computed
        Then: balance_amount is preferred, else total - paid
        """
        # Arrange
        mock_document_repo.list_invoices.return_value = [
            make_invoice(total="1000", paid="0", balance="250"),
            make_invoice(total="500", paid="200", balance=None),
            make_invoice(total=None, paid=None, balance=None),
        ]

        # Act
        total = await aggregator.outstanding(CUSTOMER_ID, COMPANY_ID)

        # Assert
        assert total == Decimal("550")

    async def test_skips_non_posting_documents(self, aggregator, mock_document_repo):
        """Drafts, cancelled, void and non-invoice documents never count"""
        mock_document_repo.list_invoices.return_value = [
            make_invoice(total="100"),
            make_invoice(total="1000", status=DocumentStatus.DRAFT),
            make_invoice(total="1000", status=DocumentStatus.CANCELLED),
            make_invoice(total="1000", status=DocumentStatus.VOID),
            make_invoice(total="1000", document_type=DocumentType.QUOTATION),
        ]

        total = await aggregator.outstanding(CUSTOMER_ID, COMPANY_ID)

        assert total == Decimal("100")

    async def test_no_invoices_is_zero(self, aggregator, mock_document_repo):
        mock_document_repo.list_invoices.return_value = []

        assert await aggregator.outstanding(CUSTOMER_ID, COMPANY_ID) == Decimal("0")

    async def test_as_of_is_passed_as_upper_bound(self, aggregator, mock_document_repo):
        mock_document_repo.list_invoices.return_value = []

        await aggregator.outstanding(CUSTOMER_ID, COMPANY_ID, as_of=date(2024, 1, 31))

        mock_document_repo.list_invoices.assert_awaited_once_with(
            CUSTOMER_ID, COMPANY_ID, date_to=date(2024, 1, 31)
        )

    async def test_store_error_propagates(self, aggregator, mock_document_repo):
        mock_document_repo.list_invoices.side_effect = StoreUnavailableError("list invoices")

        with pytest.raises(StoreUnavailableError):
            await aggregator.outstanding(CUSTOMER_ID, COMPANY_ID)
