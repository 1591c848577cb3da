"""Repository-level errors shared by all persistence adapters"""


class StoreUnavailableError(Exception):
    """
    Raised when the backing store cannot answer a query

    Distinct from "no rows found", which repositories report as None or an
    empty list.
    """

    def __init__(self, operation: str, reason: str = ""):
        self.operation = operation
        self.reason = reason
        message = f"Store unavailable during {operation}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
