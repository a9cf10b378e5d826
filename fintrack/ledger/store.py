"""
Transaction Store

Owns the canonical list of a user's transactions for the session.

The in-memory list is the source of truth. Every mutation rewrites the
whole collection to storage, best-effort: if the write fails we log it,
remember it in `last_save_ok`, and carry on. Storage problems on load
(unreadable backend, invalid JSON, wrong shape) start the session with
an empty ledger instead of raising.
"""

import json
from decimal import Decimal
from typing import Callable, Optional
from uuid import uuid4

from pydantic import TypeAdapter, ValidationError

from fintrack.ledger.installments import expand_draft
from fintrack.logs import get_logger
from fintrack.models.transaction import Transaction, TransactionDraft
from fintrack.services.storage import (
    KeyValueStorage,
    StorageError,
    transactions_key,
)


logger = get_logger(__name__)

_TRANSACTION_LIST = TypeAdapter(list[Transaction])

# Attempts at drawing an unused id before giving up on the id factory.
_MAX_ID_ATTEMPTS = 10


def default_id_factory() -> str:
    return str(uuid4())


def decode_transactions(raw: str) -> list[Transaction]:
    """
    Parse a stored `transactions-{user}` value.

    Floats are read as Decimal so amounts stay exact.

    Raises:
        ValueError: Invalid JSON or a record that fails validation
        RecursionError: JSON nested deeper than the parser can follow
    """
    data = json.loads(raw, parse_float=Decimal)
    return _TRANSACTION_LIST.validate_python(data)


def encode_transactions(transactions: list[Transaction]) -> str:
    """Serialize transactions to the stored JSON layout."""
    return json.dumps(
        [t.to_storage_dict() for t in transactions],
        ensure_ascii=False,
    )


class TransactionStore:
    """
    The active user's ledger.

    Usage:
        store = TransactionStore(storage, "ana")
        store.load()
        store.add(draft)
        store.remove(some_id)
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        user_id: str,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        if not user_id:
            raise ValueError("user_id must not be empty")
        self._storage = storage
        self._user_id = user_id
        self._id_factory = id_factory or default_id_factory
        self._transactions: list[Transaction] = []
        self._ids: set[str] = set()
        self.last_save_ok = True

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def transactions(self) -> list[Transaction]:
        """A copy of the ledger in insertion order."""
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def __contains__(self, transaction_id: str) -> bool:
        return transaction_id in self._ids

    def get(self, transaction_id: str) -> Optional[Transaction]:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def load(self) -> list[Transaction]:
        """
        Replace the in-memory ledger with what storage holds for this user.

        Never raises for storage or data problems; the ledger is empty instead.
        """
        key = transactions_key(self._user_id)
        transactions: list[Transaction] = []

        try:
            raw = self._storage.get(key)
        except StorageError as e:
            logger.warning("storage_read_failed", key=key, error=str(e))
            raw = None

        if raw is not None:
            try:
                transactions = decode_transactions(raw)
            except (ValueError, ValidationError, RecursionError) as e:
                logger.warning("stored_data_malformed", key=key, error=str(e))
                transactions = []

        self._transactions = []
        self._ids = set()
        stored_ids = {t.id for t in transactions}
        for transaction in transactions:
            if transaction.id in self._ids:
                replacement = self._new_id(reserved=stored_ids)
                stored_ids.add(replacement)
                logger.warning(
                    "duplicate_transaction_id",
                    key=key,
                    transaction_id=transaction.id,
                    replaced_with=replacement,
                )
                transaction = transaction.model_copy(update={"id": replacement})
            self._append(transaction)

        logger.info(
            "transactions_loaded",
            user_id=self._user_id,
            count=len(self._transactions),
        )
        return self.transactions

    def add(self, draft: TransactionDraft) -> list[Transaction]:
        """
        Add a transaction, expanding installment purchases.

        All records produced by one draft are added together, then the
        ledger is saved once.

        Returns:
            The records that were added
        """
        if not isinstance(draft, TransactionDraft):
            draft = TransactionDraft.model_validate(draft)

        issued: set[str] = set()

        def next_id() -> str:
            new_id = self._new_id(reserved=issued)
            issued.add(new_id)
            return new_id

        records = expand_draft(draft, next_id)
        for record in records:
            self._append(record)

        if draft.is_installment:
            logger.info(
                "installments_expanded",
                user_id=self._user_id,
                total=len(records),
                first_date=records[0].date.isoformat(),
                last_date=records[-1].date.isoformat(),
            )
        else:
            logger.info(
                "transaction_added",
                user_id=self._user_id,
                transaction_id=records[0].id,
                type=records[0].type.value,
            )

        self.save()
        return records

    def remove(self, transaction_id: str) -> bool:
        """
        Remove the transaction with this id.

        Unknown ids are a no-op (nothing is written).

        Returns:
            True if a record was removed
        """
        if transaction_id not in self._ids:
            logger.debug("transaction_remove_noop", transaction_id=transaction_id)
            return False

        self._transactions = [t for t in self._transactions if t.id != transaction_id]
        self._ids.discard(transaction_id)
        logger.info("transaction_removed", user_id=self._user_id, transaction_id=transaction_id)

        self.save()
        return True

    def save(self) -> bool:
        """
        Write the whole ledger to storage.

        Returns:
            True if the write succeeded. Failures are logged, not raised.
        """
        key = transactions_key(self._user_id)
        try:
            self._storage.set(key, encode_transactions(self._transactions))
        except StorageError as e:
            logger.warning(
                "storage_write_failed",
                key=key,
                count=len(self._transactions),
                error=str(e),
            )
            self.last_save_ok = False
            return False

        self.last_save_ok = True
        return True

    def _append(self, transaction: Transaction) -> None:
        self._transactions.append(transaction)
        self._ids.add(transaction.id)

    def _new_id(self, reserved: Optional[set[str]] = None) -> str:
        reserved = reserved or set()
        for _ in range(_MAX_ID_ATTEMPTS):
            candidate = self._id_factory()
            if candidate and candidate not in self._ids and candidate not in reserved:
                return candidate
        raise RuntimeError("id factory keeps returning ids that are already in use")
