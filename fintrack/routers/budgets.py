import uuid
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import Field

from ..core.security import get_current_user
from ..models.user import User
from ..schemas import BudgetRead, BudgetSummaryRead, CamelModel
from ..services.budgets import BudgetService, get_budget_service


router = APIRouter(
    prefix="/budgets",
    tags=["budgets"],
)


# ─────────────────────────────
#   SCHEMAS
# ─────────────────────────────

class BudgetWrite(CamelModel):
    budget_name: str = Field(min_length=2, max_length=100)
    allocated_amount: float = Field(ge=0.01, allow_inf_nan=False)
    related_category: str = Field(min_length=1, max_length=50)


class BudgetUse(CamelModel):
    amount: float = Field(allow_inf_nan=False)


# ─────────────────────────────
#   ENDPOINTS
# ─────────────────────────────

@router.post(
    "",
    response_model=BudgetRead,
    status_code=status.HTTP_201_CREATED,
)
def create_budget(
    payload: BudgetWrite,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    budget = service.create_budget(
        current_user.id, payload.budget_name, payload.allocated_amount, payload.related_category
    )
    return BudgetRead.from_model(budget)


@router.get(
    "",
    response_model=List[BudgetRead],
)
def list_budgets(
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    return [BudgetRead.from_model(b) for b in service.list_budgets(current_user.id)]


# Declared before "/{budget_id}" so "summary" is not parsed as an id.
@router.get(
    "/summary",
    response_model=BudgetSummaryRead,
)
def budget_summary(
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    return service.get_summary(current_user.id)


@router.get(
    "/{budget_id}",
    response_model=BudgetRead,
)
def get_budget(
    budget_id: uuid.UUID,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    return BudgetRead.from_model(service.get_budget(current_user.id, budget_id))


@router.put(
    "/{budget_id}",
    response_model=BudgetRead,
)
def update_budget(
    budget_id: uuid.UUID,
    payload: BudgetWrite,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    budget = service.update_budget(
        current_user.id,
        budget_id,
        payload.budget_name,
        payload.allocated_amount,
        payload.related_category,
    )
    return BudgetRead.from_model(budget)


@router.delete(
    "/{budget_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_budget(
    budget_id: uuid.UUID,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    service.delete_budget(current_user.id, budget_id)
    return None


@router.post(
    "/{budget_id}/use",
    status_code=status.HTTP_204_NO_CONTENT,
)
def use_budget(
    budget_id: uuid.UUID,
    payload: BudgetUse,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    # amount is checked by the service so closed budgets report BudgetClosed first
    service.use_budget(current_user.id, budget_id, payload.amount)
    return None


@router.post(
    "/{budget_id}/close",
    response_model=BudgetRead,
)
def close_budget(
    budget_id: uuid.UUID,
    service: BudgetService = Depends(get_budget_service),
    current_user: User = Depends(get_current_user),
):
    return BudgetRead.from_model(service.close_budget(current_user.id, budget_id))
