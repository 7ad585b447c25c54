import uuid
from datetime import datetime

from sqlmodel import SQLModel, Field

from ..core.clock import utc_now


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True, index=True)

    email: str = Field(index=True, unique=True)
    full_name: str = Field(max_length=100)
    hashed_password: str

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
