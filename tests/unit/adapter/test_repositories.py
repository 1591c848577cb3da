"""Unit tests for SQLAlchemy repository error handling"""

import pytest
from unittest.mock import AsyncMock
from sqlalchemy.exc import OperationalError

from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from src.adapter.repositories.sales_document_repository import SqlAlchemySalesDocumentRepository
from src.app.repositories.errors import StoreUnavailableError
from tests.fixtures.factories import COMPANY_ID, CUSTOMER_ID


@pytest.fixture
def failing_session():
    """Session whose every query fails at the driver"""
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT ...", {}, Exception("server closed the connection"))
    return session


@pytest.mark.asyncio
class TestRepositoryErrors:
    """Database failures become StoreUnavailableError, never empty results"""

    async def test_customer_lookup(self, failing_session):
        with pytest.raises(StoreUnavailableError) as exc_info:
            await SqlAlchemyCustomerRepository(failing_session).get_active(CUSTOMER_ID, COMPANY_ID)

        assert exc_info.value.operation == "customer lookup"
        assert "server closed the connection" in exc_info.value.reason

    async def test_latest_entry(self, failing_session):
        with pytest.raises(StoreUnavailableError):
            await SqlAlchemyLedgerEntryRepository(failing_session).get_latest(CUSTOMER_ID, COMPANY_ID)

    async def test_has_entries(self, failing_session):
        with pytest.raises(StoreUnavailableError):
            await SqlAlchemyLedgerEntryRepository(failing_session).has_entries(CUSTOMER_ID, COMPANY_ID)

    async def test_list_entries(self, failing_session):
        with pytest.raises(StoreUnavailableError):
            await SqlAlchemyLedgerEntryRepository(failing_session).list_entries(CUSTOMER_ID, COMPANY_ID)

    async def test_list_invoices(self, failing_session):
        with pytest.raises(StoreUnavailableError):
            await SqlAlchemySalesDocumentRepository(failing_session).list_invoices(CUSTOMER_ID, COMPANY_ID)
