import itertools
import os
import uuid
from datetime import datetime, timedelta, timezone

# Must be set before fintrack.config is imported.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from fintrack.core.security import get_current_user
from fintrack.database import get_session
from fintrack.main import create_app
from fintrack.models.budget import Budget, BudgetStatus
from fintrack.models.transaction import Transaction, TransactionType
from fintrack.models.user import User
from fintrack.services.advisor import get_chat_provider
from fintrack.services.repository import LedgerRepository


BASE_TIME = datetime(2026, 3, 1, 9, 0, 0, tzinfo=timezone.utc)


class RecordingChatProvider:
    def __init__(self, reply="Spend less on takeout."):
        self.reply = reply
        self.calls = []

    def send(self, system_prompt, message):
        self.calls.append((system_prompt, message))
        return self.reply


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def repo(session):
    return LedgerRepository(session)


def _make_user(repo, email, full_name):
    return repo.save(
        User(id=uuid.uuid4(), email=email, full_name=full_name, hashed_password="unused")
    )


@pytest.fixture
def user(repo):
    return _make_user(repo, "ana@example.com", "Ana Lopez")


@pytest.fixture
def other_user(repo):
    return _make_user(repo, "sam@example.com", "Sam Reed")


@pytest.fixture
def add_tx(repo, user):
    """Insert a transaction; each call is created one minute after the last."""
    ticks = itertools.count()

    def _add(tx_type, category, amount, owner=None):
        created = BASE_TIME + timedelta(minutes=next(ticks))
        tx = Transaction(
            id=uuid.uuid4(),
            user_id=(owner or user).id,
            type=TransactionType(tx_type),
            category=category,
            amount=amount,
            transaction_date=created,
            created_at=created,
        )
        return repo.save(tx)

    return _add


@pytest.fixture
def add_budget(repo, user):
    def _add(name, category, allocated, status=BudgetStatus.ACTIVE, owner=None):
        budget = Budget(
            id=uuid.uuid4(),
            user_id=(owner or user).id,
            name=name,
            category=category,
            allocated_amount=allocated,
            status=status,
        )
        return repo.save(budget)

    return _add


@pytest.fixture
def chat_provider():
    return RecordingChatProvider()


@pytest.fixture
def app(session, user, chat_provider):
    app = create_app()
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_current_user] = lambda: user
    app.dependency_overrides[get_chat_provider] = lambda: chat_provider
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
