from fastapi import APIRouter, Depends

from ..core.security import get_current_user
from ..models.user import User
from ..schemas import DashboardSummaryRead
from ..services.dashboard import DashboardService, get_dashboard_service


router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get(
    "/summary",
    response_model=DashboardSummaryRead,
)
def dashboard_summary(
    service: DashboardService = Depends(get_dashboard_service),
    current_user: User = Depends(get_current_user),
):
    return service.get_summary(current_user.id)
