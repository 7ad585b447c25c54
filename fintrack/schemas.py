import uuid
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from .models.budget import Budget
from .models.transaction import Transaction


# ─────────────────────────────
#   VIEW MODELS (camelCase on the wire)
# ─────────────────────────────

class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TransactionRead(CamelModel):
    id: uuid.UUID
    type: str
    category: str
    amount: float
    date: datetime
    created_at: datetime

    @classmethod
    def from_model(cls, tx: Transaction) -> "TransactionRead":
        return cls(
            id=tx.id,
            type=tx.type.value,
            category=tx.category,
            amount=tx.amount,
            date=tx.transaction_date,
            created_at=tx.created_at,
        )


class BudgetRead(CamelModel):
    id: uuid.UUID
    name: str
    allocated_amount: float
    category: str
    status: str

    @classmethod
    def from_model(cls, budget: Budget) -> "BudgetRead":
        return cls(
            id=budget.id,
            name=budget.name,
            allocated_amount=budget.allocated_amount,
            category=budget.category,
            status=budget.status.value,
        )


class BalanceRead(CamelModel):
    balance: float


class CategorySpending(CamelModel):
    allocated: float
    spent: float
    remaining: float


class BudgetSummaryRead(CamelModel):
    total_income: float
    total_expenses: float
    total_allocated: float
    remaining_budget: float
    # Keyed by budget name AND budget category; both point at the same entry.
    category_breakdown: Dict[str, CategorySpending]


class DashboardSummaryRead(CamelModel):
    balance: float
    total_income: float
    total_expenses: float
    spending_percentage: float
    recent_transactions: List[TransactionRead]


class ChatRequest(CamelModel):
    user_message: str


class ChatReply(CamelModel):
    reply: str


class UserRead(CamelModel):
    id: uuid.UUID
    email: str
    full_name: str
    created_at: Optional[datetime] = None
