"""Get Credit Info Use Case

Combines the current balance with the customer's credit limit for
invoice-creation gating and customer views.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union
from libs.result import Result, Return
from src.domain.credit import CreditStatus, DEFAULT_HEADROOM_THRESHOLD, classify_credit, to_threshold
from .dtos import CreditInfoDTO
from .resolve_balance import ResolveBalance


class GetCreditInfo:
    """
    Use Case: Credit standing of a customer

    Business Rules:
    1. Always uses the current (cacheable) balance
    2. Status comes from classify_credit with the configured threshold
    3. Invoices may be created unless the limit is exceeded
    """

    def __init__(
        self,
        resolve_balance: ResolveBalance,
        headroom_threshold: Union[Decimal, float, str] = DEFAULT_HEADROOM_THRESHOLD,
    ):
        self.resolve_balance = resolve_balance
        self.headroom_threshold = to_threshold(headroom_threshold)

    async def execute(self, customer_id: str, company_id: str) -> Result[CreditInfoDTO]:
        """
        Execute credit info lookup

        Args:
            customer_id: Customer identifier
            company_id: Company (tenant) identifier

        Returns:
            Result[CreditInfoDTO]: Credit standing or the resolver's error
        """
        result = await self.resolve_balance.execute(customer_id, company_id)
        if result.is_err():
            return result

        summary = result.value
        status = classify_credit(summary, self.headroom_threshold)

        utilization = None
        if not summary.unlimited_credit:
            exposure = max(summary.current_balance, Decimal("0"))
            utilization = (exposure / summary.credit_limit * 100).quantize(
                Decimal("0.01"), rounding=ROUND_HALF_UP
            )

        return Return.ok(
            CreditInfoDTO(
                customer_id=summary.customer_id,
                company_id=summary.company_id,
                credit_limit=summary.credit_limit,
                outstanding_balance=summary.current_balance,
                available_credit=summary.available_credit,
                credit_status=status,
                can_create_invoice=status != CreditStatus.EXCEEDED,
                utilization_percent=utilization,
                warning=status in (CreditStatus.LIMITED, CreditStatus.EXCEEDED),
                balance_source=summary.source.path,
            )
        )
