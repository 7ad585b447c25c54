"""Totals derived from a snapshot of a user's transactions.

Every function here is pure: callers pass the list they fetched once and
all figures of one response are computed from that same list.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple

from ..models.transaction import Transaction, TransactionType


@dataclass(frozen=True)
class LedgerTotals:
    total_income: float = 0.0
    total_expenses: float = 0.0

    @property
    def balance(self) -> float:
        return self.total_income - self.total_expenses

    @property
    def spending_percentage(self) -> float:
        if self.total_income > 0:
            return self.total_expenses / self.total_income * 100
        return 0.0


def compute_totals(transactions: Iterable[Transaction]) -> LedgerTotals:
    income = 0.0
    expenses = 0.0
    for tx in transactions:
        if tx.type == TransactionType.INCOME:
            income += tx.amount
        elif tx.type == TransactionType.EXPENSE:
            expenses += tx.amount
    return LedgerTotals(total_income=income, total_expenses=expenses)


def category_spend(transactions: Iterable[Transaction], category: str) -> float:
    return sum(
        tx.amount
        for tx in transactions
        if tx.type == TransactionType.EXPENSE and tx.category == category
    )


def spend_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Expense totals per category, in the order categories are first seen."""
    spending: Dict[str, float] = {}
    for tx in transactions:
        if tx.type != TransactionType.EXPENSE:
            continue
        spending[tx.category] = spending.get(tx.category, 0.0) + tx.amount
    return spending


def top_expense_categories(transactions: Sequence[Transaction], limit: int = 5) -> List[Tuple[str, float]]:
    # sorted() is stable, so equal totals keep first-seen order
    spending = spend_by_category(transactions)
    ranked = sorted(spending.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def most_recent(transactions: Iterable[Transaction], limit: int) -> List[Transaction]:
    ordered = sorted(transactions, key=lambda tx: tx.created_at, reverse=True)
    return ordered[:limit]
