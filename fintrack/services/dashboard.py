import uuid

from fastapi import Depends

from ..schemas import DashboardSummaryRead, TransactionRead
from .aggregation import compute_totals, most_recent
from .repository import LedgerRepository, get_repository


RECENT_TRANSACTIONS = 5


class DashboardService:
    def __init__(self, repository: LedgerRepository):
        self._repo = repository

    def get_summary(self, user_id: uuid.UUID) -> DashboardSummaryRead:
        txs = self._repo.transactions_for(user_id)
        totals = compute_totals(txs)
        return DashboardSummaryRead(
            balance=totals.balance,
            total_income=totals.total_income,
            total_expenses=totals.total_expenses,
            spending_percentage=totals.spending_percentage,
            recent_transactions=[
                TransactionRead.from_model(tx) for tx in most_recent(txs, RECENT_TRANSACTIONS)
            ],
        )


def get_dashboard_service(repository: LedgerRepository = Depends(get_repository)) -> DashboardService:
    return DashboardService(repository)
