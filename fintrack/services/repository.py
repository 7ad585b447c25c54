import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlmodel import Session, select

from ..database import get_session
from ..models.budget import Budget
from ..models.transaction import Transaction
from ..models.user import User


class LedgerRepository:
    """Per-request access to a user's transactions and budgets.

    Writes commit immediately. Database errors are not caught here; they
    reach the caller as raised by SQLAlchemy.
    """

    def __init__(self, session: Session):
        self._session = session

    # Transactions

    def transactions_for(self, user_id: uuid.UUID, limit: Optional[int] = None) -> List[Transaction]:
        """All of the user's transactions, newest created first."""
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._session.exec(stmt).all())

    def transactions_by_date(self, user_id: uuid.UUID) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id)
            .order_by(Transaction.transaction_date.desc())
        )
        return list(self._session.exec(stmt).all())

    def transactions_between(self, user_id: uuid.UUID, start: datetime, end: datetime) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(
                Transaction.user_id == user_id,
                Transaction.transaction_date >= start,
                Transaction.transaction_date <= end,
            )
            .order_by(Transaction.transaction_date.desc())
        )
        return list(self._session.exec(stmt).all())

    def transactions_in_category(self, user_id: uuid.UUID, category: str) -> List[Transaction]:
        stmt = (
            select(Transaction)
            .where(Transaction.user_id == user_id, Transaction.category == category)
            .order_by(Transaction.transaction_date.desc())
        )
        return list(self._session.exec(stmt).all())

    def get_transaction(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        return self._session.get(Transaction, transaction_id)

    # Budgets

    def budgets_for(self, user_id: uuid.UUID) -> List[Budget]:
        stmt = (
            select(Budget)
            .where(Budget.user_id == user_id)
            .order_by(Budget.created_at.asc())
        )
        return list(self._session.exec(stmt).all())

    def get_budget(self, budget_id: uuid.UUID) -> Optional[Budget]:
        return self._session.get(Budget, budget_id)

    # Users

    def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return self._session.get(User, user_id)

    def find_user_by_email(self, email: str) -> Optional[User]:
        return self._session.exec(select(User).where(User.email == email)).first()

    # Writes

    def save(self, entity):
        self._session.add(entity)
        self._session.commit()
        self._session.refresh(entity)
        return entity

    def delete(self, entity) -> None:
        self._session.delete(entity)
        self._session.commit()


def get_repository(session: Session = Depends(get_session)) -> LedgerRepository:
    return LedgerRepository(session)
