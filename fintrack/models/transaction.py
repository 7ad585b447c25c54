import uuid
from datetime import datetime
from enum import Enum

from sqlmodel import SQLModel, Field

from ..core.clock import utc_now


class TransactionType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    user_id: uuid.UUID = Field(
        foreign_key="users.id",
        index=True
    )

    type: TransactionType = Field(index=True)
    category: str = Field(max_length=50, index=True)
    amount: float = Field(gt=0)
    transaction_date: datetime = Field(default_factory=utc_now, index=True)

    created_at: datetime = Field(default_factory=utc_now, index=True)
