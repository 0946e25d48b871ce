"""
Ledger service — records double-entry transactions.

This service enforces the fundamental rules:
1. A transaction has a description and at least two lines
2. Every line posts to an existing account
3. Every line carries a debit or a credit, never both, never neither,
   with at most 4 decimal places
4. Total debits equal total credits

Checks run in that order and the first failure wins. Nothing
is written unless every check passes. No other service writes
transactions.
"""

import logging
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from erp_accounting.models.account import Account
from erp_accounting.models.transaction import Transaction, TransactionLine
from erp_accounting.models.types import MAX_AMOUNT, fits_amount
from erp_accounting.schemas.transaction import (
    TransactionCreate,
    TransactionLineCreate,
)
from erp_accounting.services.chart_service import check_length, check_reference
from erp_accounting.services.exceptions import (
    AccountingError,
    ImbalancedTransactionError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def is_single_sided(debit: Decimal, credit: Decimal) -> bool:
    """Exactly one side positive, the other exactly zero."""
    return (debit > 0 and credit == 0) or (credit > 0 and debit == 0)


class LedgerService:
    """
    All transaction writes pass through this service.

    The service takes a database session as a constructor
    argument. The caller controls the transaction boundary:
    it decides when to commit or rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def _validate_line(self, index: int, line: TransactionLineCreate) -> None:
        if line.account_id is None:
            raise ValidationError(f"Line {index}: account is required")
        check_reference(line.account_id, f"line {index} account")

        if self.db.get(Account, line.account_id) is None:
            raise NotFoundError(
                f"Line {index}: account {line.account_id} not found"
            )

        if not (fits_amount(line.debit) and fits_amount(line.credit)):
            raise ValidationError(
                f"Line {index}: amounts must be below {MAX_AMOUNT} with at "
                f"most 4 decimal places (debit={line.debit}, "
                f"credit={line.credit})"
            )

        if not is_single_sided(line.debit, line.credit):
            raise ValidationError(
                f"Line {index}: must carry a debit or a credit, "
                f"but not both (debit={line.debit}, credit={line.credit})"
            )

    def _validate(self, request: TransactionCreate, description: str) -> None:
        if not description or len(request.lines) < 2:
            raise ValidationError(
                "A description and at least two lines are required"
            )
        check_length(description, Transaction.description, "Description")

        total_debit = Decimal("0")
        total_credit = Decimal("0")
        for index, line in enumerate(request.lines, start=1):
            self._validate_line(index, line)
            total_debit += line.debit
            total_credit += line.credit

        if total_debit != total_credit:
            raise ImbalancedTransactionError(total_debit, total_credit)

    def record_transaction(
        self, request: TransactionCreate, created_by: str
    ) -> Transaction:
        """
        Validate and persist a transaction with its lines.

        created_by is the acting user as supplied by the caller.
        If any check fails nothing is added to the session.
        """
        description = (request.description or "").strip()
        try:
            self._validate(request, description)
        except AccountingError as exc:
            logger.warning("Rejected transaction %r: %s", description, exc)
            raise

        actor = str(created_by or "").strip()
        if not actor:
            raise ValidationError("The acting user is required")
        check_length(actor, Transaction.created_by, "Acting user")

        txn = Transaction(
            date=request.date or datetime.utcnow(),
            description=description,
            created_by=actor,
        )
        txn.lines = [
            TransactionLine(
                position=position,
                account_id=line.account_id,
                debit=line.debit,
                credit=line.credit,
            )
            for position, line in enumerate(request.lines)
        ]
        self.db.add(txn)
        self.db.flush()
        logger.info(
            "Recorded transaction %s (%d lines, %s) by %s",
            txn.id, len(txn.lines), txn.total_debit, txn.created_by,
        )
        return txn

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get a transaction by ID."""
        txn = self.db.get(Transaction, transaction_id)
        if not txn:
            raise NotFoundError(f"Transaction {transaction_id} not found")
        return txn

    def list_transactions(self) -> list[Transaction]:
        """Return all transactions, oldest first."""
        transactions = self.db.execute(
            select(Transaction).order_by(Transaction.date, Transaction.id)
        ).scalars().all()
        return list(transactions)

    def delete_transaction(self, transaction_id: int) -> None:
        """
        Hard-delete a transaction and its lines.

        No dependent-data check and no audit record: reports
        simply stop including it.
        """
        txn = self.get_transaction(transaction_id)
        self.db.delete(txn)
        self.db.flush()
        logger.info("Deleted transaction %s", transaction_id)
