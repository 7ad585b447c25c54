import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import SQLModel, Field

from ..core.clock import utc_now


class BudgetStatus(str, Enum):
    ACTIVE = "active"
    EXCEEDED = "exceeded"
    # Terminal: only reachable through an explicit close.
    COMPLETED = "completed"


class Budget(SQLModel, table=True):
    __tablename__ = "budgets"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    user_id: uuid.UUID = Field(foreign_key="users.id", index=True)

    name: str = Field(max_length=100)

    # Matched against Transaction.category; there is no foreign key.
    category: str = Field(max_length=50, index=True)

    allocated_amount: float = Field(gt=0)
    status: BudgetStatus = Field(default=BudgetStatus.ACTIVE)

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
