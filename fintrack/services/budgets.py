import logging
import uuid
from typing import List

from fastapi import Depends

from ..core.clock import utc_now
from ..core.errors import BudgetClosed, Forbidden, NotFound
from ..models.budget import Budget, BudgetStatus
from ..models.transaction import Transaction
from ..schemas import BudgetSummaryRead, CategorySpending
from .aggregation import category_spend, compute_totals
from .budget_status import compute_status, reconcile_status, validate_allocation
from .repository import LedgerRepository, get_repository
from .transactions import TransactionService, require_positive_amount


logger = logging.getLogger(__name__)


class BudgetService:
    """Budget operations for one authenticated user.

    Budgets are tied to transactions only by category name. A budget's
    status is re-derived from the current transactions whenever it is
    served, except once it has been closed (``completed``).
    """

    def __init__(self, repository: LedgerRepository):
        self._repo = repository

    def _owned_budget(self, user_id: uuid.UUID, budget_id: uuid.UUID) -> Budget:
        budget = self._repo.get_budget(budget_id)
        if budget is None:
            raise NotFound("Budget not found")
        if budget.user_id != user_id:
            raise Forbidden("You don't have permission to access this budget")
        return budget

    def create_budget(
        self, user_id: uuid.UUID, name: str, allocated_amount: float, category: str
    ) -> Budget:
        require_positive_amount(allocated_amount)
        txs = self._repo.transactions_for(user_id)
        validate_allocation(allocated_amount, compute_totals(txs).total_income)

        # Existing spend in the category counts from the start.
        spent = category_spend(txs, category)
        now = utc_now()
        budget = Budget(
            id=uuid.uuid4(),
            user_id=user_id,
            name=name,
            allocated_amount=allocated_amount,
            category=category,
            status=compute_status(spent, allocated_amount),
            created_at=now,
            updated_at=now,
        )
        return self._repo.save(budget)

    def list_budgets(self, user_id: uuid.UUID) -> List[Budget]:
        budgets = self._repo.budgets_for(user_id)
        txs = self._repo.transactions_for(user_id)
        return [reconcile_status(b, txs, self._repo) for b in budgets]

    def get_budget(self, user_id: uuid.UUID, budget_id: uuid.UUID) -> Budget:
        budget = self._owned_budget(user_id, budget_id)
        return reconcile_status(budget, self._repo.transactions_for(user_id), self._repo)

    def update_budget(
        self,
        user_id: uuid.UUID,
        budget_id: uuid.UUID,
        name: str,
        allocated_amount: float,
        category: str,
    ) -> Budget:
        budget = self._owned_budget(user_id, budget_id)
        if budget.status == BudgetStatus.COMPLETED:
            raise BudgetClosed("Completed budgets cannot be updated")
        require_positive_amount(allocated_amount)

        txs = self._repo.transactions_for(user_id)
        validate_allocation(allocated_amount, compute_totals(txs).total_income)

        budget.name = name
        budget.allocated_amount = allocated_amount
        budget.category = category
        budget.status = compute_status(category_spend(txs, category), allocated_amount)
        budget.updated_at = utc_now()
        return self._repo.save(budget)

    def delete_budget(self, user_id: uuid.UUID, budget_id: uuid.UUID) -> None:
        budget = self._owned_budget(user_id, budget_id)
        self._repo.delete(budget)

    def use_budget(self, user_id: uuid.UUID, budget_id: uuid.UUID, amount: float) -> Transaction:
        """Spend from a budget by recording an expense in its category."""
        budget = self._owned_budget(user_id, budget_id)
        if budget.status == BudgetStatus.COMPLETED:
            raise BudgetClosed("Completed budgets cannot be used")
        require_positive_amount(amount)
        return TransactionService(self._repo).create_expense(user_id, budget.category, amount)

    def close_budget(self, user_id: uuid.UUID, budget_id: uuid.UUID) -> Budget:
        budget = self._owned_budget(user_id, budget_id)
        budget.status = BudgetStatus.COMPLETED
        budget.updated_at = utc_now()
        logger.info("Closed budget %s for user %s", budget_id, user_id)
        return self._repo.save(budget)

    def get_summary(self, user_id: uuid.UUID) -> BudgetSummaryRead:
        budgets = self._repo.budgets_for(user_id)
        txs = self._repo.transactions_for(user_id)

        totals = compute_totals(txs)
        total_allocated = sum(b.allocated_amount for b in budgets)

        breakdown = {}
        for budget in budgets:
            spent = category_spend(txs, budget.category)
            spending = CategorySpending(
                allocated=budget.allocated_amount,
                spent=spent,
                remaining=budget.allocated_amount - spent,
            )
            # Clients look entries up by either key.
            breakdown[budget.name] = spending
            breakdown[budget.category] = spending

        return BudgetSummaryRead(
            total_income=totals.total_income,
            total_expenses=totals.total_expenses,
            total_allocated=total_allocated,
            remaining_budget=totals.total_income - total_allocated,
            category_breakdown=breakdown,
        )


def get_budget_service(repository: LedgerRepository = Depends(get_repository)) -> BudgetService:
    return BudgetService(repository)
