"""Customer Balance API Routes

FastAPI routes for customer balances, credit status and ledger statements.
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from libs.result import Result
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.ledger_entry_repository import SqlAlchemyLedgerEntryRepository
from src.adapter.repositories.sales_document_repository import SqlAlchemySalesDocumentRepository
from src.app.services.balance_cache import BalanceCache
from src.app.use_cases.ledger import (
    CreditInfoDTO,
    CustomerLedgerDTO,
    GetCreditInfo,
    GetCustomerLedger,
    InvalidateAllBalances,
    InvalidateBalance,
    LedgerVerificationDTO,
    ResolveBalance,
    VerifyCustomerLedger,
    parse_filters,
)
from src.app.use_cases.ledger.errors import (
    AGGREGATION_TIMEOUT,
    CACHE_UNAVAILABLE,
    CUSTOMER_NOT_FOUND,
    INVALID_FILTER,
    STORE_UNAVAILABLE,
)
from src.domain.ledger_summary import LedgerSummary
from src.depends import get_balance_cache, get_session
from src.api.error import ClientError

router = APIRouter(prefix="/customers", tags=["Customer Balances"])

ERROR_STATUS = {
    CUSTOMER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    INVALID_FILTER: status.HTTP_400_BAD_REQUEST,
    STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    AGGREGATION_TIMEOUT: status.HTTP_503_SERVICE_UNAVAILABLE,
    CACHE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}

ERROR_RESPONSES = {
    400: {"description": "Invalid filter"},
    404: {"description": "Customer not found"},
    503: {"description": "Balance store unavailable, safe to retry"},
}


def _unwrap(result: Result):
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )
    return result.value


def _resolver(session: AsyncSession, cache: BalanceCache) -> ResolveBalance:
    return ResolveBalance(
        customer_repo=SqlAlchemyCustomerRepository(session),
        ledger_repo=SqlAlchemyLedgerEntryRepository(session),
        document_repo=SqlAlchemySalesDocumentRepository(session),
        cache=cache,
        query_timeout=ApplicationConfig.LEDGER_QUERY_TIMEOUT_SECONDS,
    )


@router.get(
    "/{customer_id}/balance",
    response_model=LedgerSummary,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def get_customer_balance(
    customer_id: str,
    company_id: str = Query(..., min_length=1),
    date_from: Optional[str] = Query(default=None),
    date_to: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    cache: BalanceCache = Depends(get_balance_cache),
):
    """
    Get a customer's balance.

    Without dates this is the current balance (cached for a few minutes).
    With `date_to` the balance is resolved as of that date and never cached.

    **Returns:**
    - 200: Ledger summary
    - 400: Malformed or inverted date range
    - 404: Customer not found in this company
    - 503: Store unavailable or timed out
    """
    filters = _unwrap(parse_filters(date_from, date_to))
    use_case = _resolver(session, cache)
    return _unwrap(await use_case.execute(customer_id, company_id, filters))


@router.get(
    "/{customer_id}/credit-info",
    response_model=CreditInfoDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def get_customer_credit_info(
    customer_id: str,
    company_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
    cache: BalanceCache = Depends(get_balance_cache),
):
    """
    Get a customer's credit standing.

    Status is one of `unlimited`, `available`, `limited`, `exceeded`;
    `can_create_invoice` is false only when the limit is exceeded.
    """
    use_case = GetCreditInfo(
        _resolver(session, cache),
        headroom_threshold=ApplicationConfig.CREDIT_HEADROOM_THRESHOLD,
    )
    return _unwrap(await use_case.execute(customer_id, company_id))


@router.get(
    "/{customer_id}/ledger",
    response_model=CustomerLedgerDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def get_customer_ledger(
    customer_id: str,
    company_id: str = Query(..., min_length=1),
    date_from: Optional[str] = Query(default=None),
    date_to: Optional[str] = Query(default=None),
    transaction_type: Optional[str] = Query(default=None),
    session: AsyncSession = Depends(get_session),
    cache: BalanceCache = Depends(get_balance_cache),
):
    """
    Get a customer ledger statement, newest rows first.

    **Query parameters:**
    - `company_id` (required): Company identifier
    - `date_from`, `date_to` (optional): ISO dates bounding the statement
    - `transaction_type` (optional): Show only rows of this type
    """
    filters = _unwrap(parse_filters(date_from, date_to, transaction_type))
    use_case = GetCustomerLedger(
        _resolver(session, cache),
        ledger_repo=SqlAlchemyLedgerEntryRepository(session),
        document_repo=SqlAlchemySalesDocumentRepository(session),
        query_timeout=ApplicationConfig.LEDGER_QUERY_TIMEOUT_SECONDS,
    )
    return _unwrap(await use_case.execute(customer_id, company_id, filters))


@router.get(
    "/{customer_id}/ledger/verify",
    response_model=LedgerVerificationDTO,
    status_code=status.HTTP_200_OK,
    responses=ERROR_RESPONSES,
)
async def verify_customer_ledger(
    customer_id: str,
    company_id: str = Query(..., min_length=1),
    session: AsyncSession = Depends(get_session),
):
    """Check that every ledger entry's running balance follows from the previous one."""
    use_case = VerifyCustomerLedger(
        customer_repo=SqlAlchemyCustomerRepository(session),
        ledger_repo=SqlAlchemyLedgerEntryRepository(session),
        query_timeout=ApplicationConfig.LEDGER_QUERY_TIMEOUT_SECONDS,
    )
    return _unwrap(await use_case.execute(customer_id, company_id))


@router.post(
    "/{customer_id}/balance/invalidate",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def invalidate_customer_balance(
    customer_id: str,
    company_id: str = Query(..., min_length=1),
    cache: BalanceCache = Depends(get_balance_cache),
):
    """
    Drop a customer's cached balance.

    Call after any invoice, payment or opening-balance change is committed.
    """
    _unwrap(await InvalidateBalance(cache).execute(customer_id, company_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/balance-cache",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def flush_balance_cache(cache: BalanceCache = Depends(get_balance_cache)):
    """Drop every cached balance (administrative)."""
    _unwrap(await InvalidateAllBalances(cache).execute())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
