from fastapi import APIRouter, Depends

from ..core.security import get_current_user
from ..models.user import User
from ..schemas import ChatReply, ChatRequest
from ..services.advisor import AdvisorService, get_advisor_service


router = APIRouter(
    prefix="/ai",
    tags=["ai"],
)


@router.post(
    "/chat",
    response_model=ChatReply,
)
def chat(
    payload: ChatRequest,
    service: AdvisorService = Depends(get_advisor_service),
    current_user: User = Depends(get_current_user),
):
    """Answer a question using a snapshot of the user's own finances."""
    return ChatReply(reply=service.chat(current_user, payload.user_message))
