"""Error codes returned by ledger use cases"""

from libs.result import Error

CUSTOMER_NOT_FOUND = "CUSTOMER_NOT_FOUND"
STORE_UNAVAILABLE = "STORE_UNAVAILABLE"
AGGREGATION_TIMEOUT = "AGGREGATION_TIMEOUT"
INVALID_FILTER = "INVALID_FILTER"
CACHE_UNAVAILABLE = "CACHE_UNAVAILABLE"


def customer_not_found(customer_id: str, company_id: str) -> Error:
    return Error(
        code=CUSTOMER_NOT_FOUND,
        message=f"Customer {customer_id} not found in company {company_id}",
        reason="Customer does not exist, belongs to another company, or is inactive",
    )


def store_unavailable(operation: str, reason: str) -> Error:
    return Error(
        code=STORE_UNAVAILABLE,
        message=f"Balance store unavailable during {operation}",
        reason=reason,
    )


def invalid_filter(message: str) -> Error:
    return Error(code=INVALID_FILTER, message=message)
