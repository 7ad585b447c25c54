import logging
import math
import uuid
from datetime import datetime
from typing import List, Optional

from fastapi import Depends

from ..core.clock import as_utc, utc_now
from ..core.errors import Forbidden, InvalidAmount, InvalidTransactionType, NotFound
from ..models.transaction import Transaction, TransactionType
from .aggregation import compute_totals
from .repository import LedgerRepository, get_repository


logger = logging.getLogger(__name__)


def require_positive_amount(amount: float) -> None:
    # rejects inf and nan too
    if not math.isfinite(amount) or amount <= 0:
        raise InvalidAmount()


class TransactionService:
    def __init__(self, repository: LedgerRepository):
        self._repo = repository

    def create_income(
        self, user_id: uuid.UUID, category: str, amount: float, date: Optional[datetime] = None
    ) -> Transaction:
        return self._create(user_id, TransactionType.INCOME, category, amount, date)

    def create_expense(
        self, user_id: uuid.UUID, category: str, amount: float, date: Optional[datetime] = None
    ) -> Transaction:
        return self._create(user_id, TransactionType.EXPENSE, category, amount, date)

    def _create(
        self,
        user_id: uuid.UUID,
        tx_type: TransactionType,
        category: str,
        amount: float,
        date: Optional[datetime],
    ) -> Transaction:
        require_positive_amount(amount)
        now = utc_now()
        tx = Transaction(
            id=uuid.uuid4(),
            user_id=user_id,
            type=tx_type,
            category=category,
            amount=amount,
            transaction_date=as_utc(date) or now,
            created_at=now,
        )
        return self._repo.save(tx)

    def list_transactions(self, user_id: uuid.UUID) -> List[Transaction]:
        return self._repo.transactions_by_date(user_id)

    def get_transaction(self, user_id: uuid.UUID, transaction_id: uuid.UUID) -> Transaction:
        tx = self._repo.get_transaction(transaction_id)
        if tx is None:
            raise NotFound("Transaction not found")
        if tx.user_id != user_id:
            raise Forbidden("You don't have permission to access this transaction")
        return tx

    def update_transaction(
        self,
        user_id: uuid.UUID,
        transaction_id: uuid.UUID,
        type: Optional[str] = None,
        category: Optional[str] = None,
        amount: Optional[float] = None,
        date: Optional[datetime] = None,
    ) -> Transaction:
        """Replace only the fields that were supplied."""
        tx = self.get_transaction(user_id, transaction_id)

        if type is not None:
            try:
                tx.type = TransactionType(type.lower())
            except ValueError:
                raise InvalidTransactionType()
        if category:
            tx.category = category
        if amount is not None:
            require_positive_amount(amount)
            tx.amount = amount
        if date is not None:
            tx.transaction_date = as_utc(date)

        return self._repo.save(tx)

    def delete_transaction(self, user_id: uuid.UUID, transaction_id: uuid.UUID) -> None:
        tx = self.get_transaction(user_id, transaction_id)
        self._repo.delete(tx)
        logger.info("Deleted transaction %s for user %s", transaction_id, user_id)

    def get_balance(self, user_id: uuid.UUID) -> float:
        return compute_totals(self._repo.transactions_for(user_id)).balance

    def transactions_between(self, user_id: uuid.UUID, start: datetime, end: datetime) -> List[Transaction]:
        return self._repo.transactions_between(user_id, as_utc(start), as_utc(end))

    def transactions_in_category(self, user_id: uuid.UUID, category: str) -> List[Transaction]:
        return self._repo.transactions_in_category(user_id, category)


def get_transaction_service(repository: LedgerRepository = Depends(get_repository)) -> TransactionService:
    return TransactionService(repository)
