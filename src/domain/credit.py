"""Credit status classification

Pure functions over a LedgerSummary, safe to call on every render.
"""

from decimal import Decimal
from enum import Enum
from typing import Union
from src.domain.ledger_summary import LedgerSummary

DEFAULT_HEADROOM_THRESHOLD = Decimal("0.8")


class CreditStatus(str, Enum):
    """Credit standing of a customer"""
    UNLIMITED = "unlimited"  # No credit limit configured
    AVAILABLE = "available"  # Below the headroom threshold
    LIMITED = "limited"      # Between the threshold and the limit (inclusive)
    EXCEEDED = "exceeded"    # Over the limit


def to_threshold(value: Union[Decimal, float, str]) -> Decimal:
    """Normalize a headroom threshold, which must lie in (0, 1]"""
    threshold = Decimal(str(value))
    if threshold <= 0 or threshold > 1:
        raise ValueError(f"Headroom threshold must be in (0, 1], got {value}")
    return threshold


def classify_credit(
    summary: LedgerSummary,
    threshold: Union[Decimal, float, str] = DEFAULT_HEADROOM_THRESHOLD,
) -> CreditStatus:
    """
    Classify a customer's credit standing

    Only exposure (customer owes the business) counts against the limit;
    a negative balance is credit in the customer's favour and is always
    AVAILABLE.

    Args:
        summary: Resolved ledger summary
        threshold: Fraction of the limit at which status becomes LIMITED

    Returns:
        CreditStatus
    """
    credit_limit = summary.credit_limit
    if credit_limit <= 0:
        return CreditStatus.UNLIMITED

    balance = summary.current_balance
    if balance < 0:
        return CreditStatus.AVAILABLE
    if balance > credit_limit:
        return CreditStatus.EXCEEDED
    if balance >= credit_limit * to_threshold(threshold):
        return CreditStatus.LIMITED
    return CreditStatus.AVAILABLE
