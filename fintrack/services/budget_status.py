import logging
from typing import Iterable

from ..core.clock import utc_now
from ..core.errors import AllocationExceedsIncome
from ..models.budget import Budget, BudgetStatus
from ..models.transaction import Transaction
from .aggregation import category_spend
from .repository import LedgerRepository


logger = logging.getLogger(__name__)

# Spend ratio at which a budget counts as exceeded.
EXCEEDED_THRESHOLD = 0.8


def compute_status(spent: float, allocated: float) -> BudgetStatus:
    """Derive the live status of a budget from its category spend.

    Never returns ``COMPLETED``; that status is only set by closing a budget.
    """
    if allocated <= 0:
        return BudgetStatus.ACTIVE
    if spent / allocated < EXCEEDED_THRESHOLD:
        return BudgetStatus.ACTIVE
    return BudgetStatus.EXCEEDED


def validate_allocation(allocated_amount: float, total_income: float) -> None:
    if allocated_amount > total_income:
        raise AllocationExceedsIncome()


def reconcile_status(
    budget: Budget,
    transactions: Iterable[Transaction],
    repository: LedgerRepository,
) -> Budget:
    """Bring a budget's stored status in line with current spend.

    Completed budgets are left untouched. The budget is written back only
    when its status actually changes.
    """
    if budget.status == BudgetStatus.COMPLETED:
        return budget

    spent = category_spend(transactions, budget.category)
    new_status = compute_status(spent, budget.allocated_amount)
    if new_status != budget.status:
        logger.info(
            "Budget %s status %s -> %s (spent %.2f of %.2f)",
            budget.id, budget.status.value, new_status.value, spent, budget.allocated_amount,
        )
        budget.status = new_status
        budget.updated_at = utc_now()
        repository.save(budget)
    return budget
