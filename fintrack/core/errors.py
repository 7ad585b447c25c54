from typing import Optional

from fastapi import status


class LedgerError(Exception):
    """Base class for failures detected by the ledger services.

    Each subclass carries the HTTP status the transport layer answers with;
    the services themselves never build HTTP responses.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(LedgerError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class Forbidden(LedgerError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You don't have permission to access this resource"


class InvalidAmount(LedgerError):
    default_detail = "Amount must be greater than 0"


class InvalidTransactionType(LedgerError):
    default_detail = "Invalid transaction type"


class AllocationExceedsIncome(LedgerError):
    default_detail = "Allocated amount exceeds total income"


class BudgetClosed(LedgerError):
    default_detail = "Completed budgets cannot be modified"


class AdvisorUnavailable(LedgerError):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "AI service unavailable"
