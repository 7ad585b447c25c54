import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import Field

from ..core.security import get_current_user
from ..models.user import User
from ..schemas import BalanceRead, CamelModel, TransactionRead
from ..services.transactions import TransactionService, get_transaction_service

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
)

# Balance lives at the top level but is served by the transaction service.
balance_router = APIRouter(tags=["transactions"])

# ─────────────────────────────
#   SCHEMAS
# ─────────────────────────────

class TransactionCreate(CamelModel):
    category: str = Field(min_length=1, max_length=50)
    amount: float = Field(ge=0.01, allow_inf_nan=False)
    date: Optional[datetime] = None


class TransactionUpdate(CamelModel):
    type: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)
    amount: Optional[float] = Field(default=None, allow_inf_nan=False)
    date: Optional[datetime] = None


# ─────────────────────────────
#   ENDPOINTS
# ─────────────────────────────

@router.post(
    "/income",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
)
def create_income(
    payload: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    tx = service.create_income(current_user.id, payload.category, payload.amount, payload.date)
    return TransactionRead.from_model(tx)


@router.post(
    "/expense",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
)
def create_expense(
    payload: TransactionCreate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    tx = service.create_expense(current_user.id, payload.category, payload.amount, payload.date)
    return TransactionRead.from_model(tx)


@router.get(
    "",
    response_model=List[TransactionRead],
)
def list_transactions(
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    """List the user's transactions, newest transaction date first."""
    return [TransactionRead.from_model(tx) for tx in service.list_transactions(current_user.id)]


@router.get(
    "/date-range",
    response_model=List[TransactionRead],
)
def transactions_by_date_range(
    start_date: datetime = Query(alias="startDate"),
    end_date: datetime = Query(alias="endDate"),
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    txs = service.transactions_between(current_user.id, start_date, end_date)
    return [TransactionRead.from_model(tx) for tx in txs]


@router.get(
    "/category",
    response_model=List[TransactionRead],
)
def transactions_by_category(
    category: str,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    txs = service.transactions_in_category(current_user.id, category)
    return [TransactionRead.from_model(tx) for tx in txs]


@router.get(
    "/{transaction_id}",
    response_model=TransactionRead,
)
def get_transaction(
    transaction_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    return TransactionRead.from_model(service.get_transaction(current_user.id, transaction_id))


@router.put(
    "/{transaction_id}",
    response_model=TransactionRead,
)
def update_transaction(
    transaction_id: uuid.UUID,
    payload: TransactionUpdate,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    """Partially update a transaction; omitted fields keep their value."""
    tx = service.update_transaction(
        current_user.id,
        transaction_id,
        type=payload.type,
        category=payload.category,
        amount=payload.amount,
        date=payload.date,
    )
    return TransactionRead.from_model(tx)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_transaction(
    transaction_id: uuid.UUID,
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    service.delete_transaction(current_user.id, transaction_id)
    return


@balance_router.get(
    "/balance",
    response_model=BalanceRead,
)
def get_balance(
    service: TransactionService = Depends(get_transaction_service),
    current_user: User = Depends(get_current_user),
):
    return BalanceRead(balance=service.get_balance(current_user.id))
