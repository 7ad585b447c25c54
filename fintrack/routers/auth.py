import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel, EmailStr, Field

from ..core.clock import utc_now
from ..core.jwt import create_access_token
from ..core.security import get_current_user, hash_password, verify_password
from ..models.user import User
from ..schemas import CamelModel, UserRead
from ..services.repository import LedgerRepository, get_repository


router = APIRouter(
    prefix="/auth",
    tags=["auth"],
)


class RegisterIn(CamelModel):
    full_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)


class TokenOut(BaseModel):
    access_token: str
    token_type: str


def _user_read(user: User) -> UserRead:
    return UserRead(
        id=user.id,
        email=user.email,
        full_name=user.full_name,
        created_at=user.created_at,
    )


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register_user(
    payload: RegisterIn,
    repository: LedgerRepository = Depends(get_repository),
):
    if any(c.isspace() for c in payload.password):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must not contain whitespace",
        )
    email_norm = payload.email.strip().lower()
    if repository.find_user_by_email(email_norm) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email already registered",
        )

    now = utc_now()
    user = User(
        id=uuid.uuid4(),
        email=email_norm,
        full_name=payload.full_name.strip(),
        hashed_password=hash_password(payload.password),
        created_at=now,
        updated_at=now,
    )
    return _user_read(repository.save(user))


@router.post(
    "/token",
    response_model=TokenOut,
    status_code=status.HTTP_200_OK,
)
def token(
    form_data: OAuth2PasswordRequestForm = Depends(),
    repository: LedgerRepository = Depends(get_repository),
):
    # OAuth2PasswordRequestForm uses 'username' for the email
    email_norm = form_data.username.strip().lower()
    user = repository.find_user_by_email(email_norm)
    if user is None or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )
    access_token = create_access_token({"sub": str(user.id), "email": user.email})
    return TokenOut(access_token=access_token, token_type="bearer")


@router.get(
    "/me",
    response_model=UserRead,
)
def me(current_user: User = Depends(get_current_user)):
    return _user_read(current_user)
