"""Integration tests for Customer Balance API endpoints"""

import pytest
from datetime import date
from decimal import Decimal
from httpx import AsyncClient

from src.domain.ledger_entry import LedgerEntryType
from tests.fixtures.factories import (
    COMPANY_ID,
    CUSTOMER_ID,
    make_customer,
    make_entry,
    make_invoice,
)

BASE = f"/api/customers/{CUSTOMER_ID}"
PARAMS = {"company_id": COMPANY_ID}


class TestCustomerBalanceAPI:
    """Integration test suite for balance endpoints"""

    @pytest.mark.asyncio
    async def test_get_balance_success(self, client: AsyncClient, db_session):
        """GET /balance resolves through the invoice path for a customer without ledger"""
        # Arrange
        db_session.add(make_customer(opening_balance="200", credit_limit="1000"))
        db_session.add(make_invoice(total="1000", paid="400"))
        await db_session.commit()

        # Act
        response = await client.get(f"{BASE}/balance", params=PARAMS)

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["customer_id"] == CUSTOMER_ID
        assert Decimal(data["current_balance"]) == Decimal("800")
        assert Decimal(data["available_credit"]) == Decimal("200")
        assert data["source"]["path"] == "invoices"
        assert data["unlimited_credit"] is False

    @pytest.mark.asyncio
    async def test_get_balance_unknown_customer(self, client: AsyncClient):
        response = await client.get(f"{BASE}/balance", params=PARAMS)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CUSTOMER_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_balance_requires_company(self, client: AsyncClient):
        response = await client.get(f"{BASE}/balance")

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_inverted_range_rejected(self, client: AsyncClient, db_session):
        db_session.add(make_customer())
        await db_session.commit()

        response = await client.get(
            f"{BASE}/balance",
            params={**PARAMS, "date_from": "2024-03-01", "date_to": "2024-01-01"},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILTER"

    @pytest.mark.asyncio
    async def test_malformed_date_rejected(self, client: AsyncClient):
        response = await client.get(f"{BASE}/balance", params={**PARAMS, "date_to": "yesterday"})

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_cached_until_invalidated(self, client: AsyncClient, db_session):
        """
        Given: A balance was read and cached
        When: A ledger entry is posted
        Then: The cached value is served until the invalidate endpoint is called
        """
        # Arrange
        db_session.add(make_customer(opening_balance="200"))
        await db_session.commit()
        first = await client.get(f"{BASE}/balance", params=PARAMS)
        db_session.add(make_entry(balance="700", debit="500", entry_date=date(2024, 1, 10)))
        await db_session.commit()

        # Act
        stale = await client.get(f"{BASE}/balance", params=PARAMS)
        invalidate = await client.post(f"{BASE}/balance/invalidate", params=PARAMS)
        fresh = await client.get(f"{BASE}/balance", params=PARAMS)

        # Assert
        assert Decimal(first.json()["current_balance"]) == Decimal("200")
        assert Decimal(stale.json()["current_balance"]) == Decimal("200")
        assert invalidate.status_code == 204
        assert Decimal(fresh.json()["current_balance"]) == Decimal("700")
        assert fresh.json()["source"]["path"] == "ledger"

    @pytest.mark.asyncio
    async def test_flush_balance_cache(self, client: AsyncClient, balance_cache, db_session):
        db_session.add(make_customer())
        await db_session.commit()
        await client.get(f"{BASE}/balance", params=PARAMS)
        assert len(balance_cache) == 1

        response = await client.delete("/api/customers/balance-cache")

        assert response.status_code == 204
        assert len(balance_cache) == 0


class TestCreditAndLedgerAPI:
    """Integration test suite for credit info, statement and verification"""

    @pytest.mark.asyncio
    async def test_credit_info_limited(self, client: AsyncClient, db_session):
        db_session.add(make_customer(credit_limit="1000"))
        db_session.add(make_entry(balance="850", debit="850"))
        await db_session.commit()

        response = await client.get(f"{BASE}/credit-info", params=PARAMS)

        assert response.status_code == 200
        data = response.json()
        assert data["credit_status"] == "limited"
        assert data["can_create_invoice"] is True
        assert data["warning"] is True
        assert Decimal(data["utilization_percent"]) == Decimal("85.00")
        assert data["balance_source"] == "ledger"

    @pytest.mark.asyncio
    async def test_credit_info_unlimited(self, client: AsyncClient, db_session):
        db_session.add(make_customer(credit_limit="0"))
        await db_session.commit()

        response = await client.get(f"{BASE}/credit-info", params=PARAMS)

        data = response.json()
        assert data["credit_status"] == "unlimited"
        assert data["available_credit"] is None

    @pytest.mark.asyncio
    async def test_ledger_statement(self, client: AsyncClient, db_session):
        # Arrange
        db_session.add(make_customer())
        db_session.add_all([
            make_entry(balance="1000", debit="1000", entry_date=date(2024, 1, 5), reference_number="INV-0001"),
            make_entry(balance="600", credit="400", entry_date=date(2024, 1, 20),
                       entry_type=LedgerEntryType.PAYMENT),
        ])
        await db_session.commit()

        # Act
        response = await client.get(f"{BASE}/ledger", params={**PARAMS, "transaction_type": "invoice"})

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert [row["document_number"] for row in data["transactions"]] == ["INV-0001"]
        assert Decimal(data["total_payments"]) == Decimal("400")
        assert Decimal(data["summary"]["current_balance"]) == Decimal("600")

    @pytest.mark.asyncio
    async def test_ledger_unknown_transaction_type(self, client: AsyncClient):
        response = await client.get(f"{BASE}/ledger", params={**PARAMS, "transaction_type": "refund"})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILTER"

    @pytest.mark.asyncio
    async def test_verify_ledger(self, client: AsyncClient, db_session):
        db_session.add(make_customer())
        db_session.add(make_entry(balance="1000", debit="1000"))
        await db_session.commit()

        response = await client.get(f"{BASE}/ledger/verify", params=PARAMS)

        assert response.status_code == 200
        assert response.json()["is_consistent"] is True
