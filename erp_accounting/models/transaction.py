"""
Transaction and transaction line models.

A transaction is a dated, described group of lines. Each line
posts either a debit or a credit to one account. Within a
transaction total debits equal total credits; that invariant
is enforced by the LedgerService before anything is written.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, DateTime, Integer, ForeignKey,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from erp_accounting.models.base import Base
from erp_accounting.models.types import Money


class Transaction(Base):
    """
    A recorded double-entry transaction.

    Transactions are never updated. Deleting one removes its
    lines with it.
    """

    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(primary_key=True)
    date: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    description: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    created_by: Mapped[str] = mapped_column(
        String(100), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )

    lines: Mapped[list["TransactionLine"]] = relationship(
        back_populates="transaction",
        cascade="all, delete-orphan",
        order_by="TransactionLine.position",
        lazy="selectin",
    )

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))

    def __repr__(self) -> str:
        return f"<Transaction {self.id} {self.description!r}>"


class TransactionLine(Base):
    __tablename__ = "transaction_lines"

    id: Mapped[int] = mapped_column(primary_key=True)
    transaction_id: Mapped[int] = mapped_column(
        ForeignKey("transactions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Submission order within the transaction
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    account_id: Mapped[int] = mapped_column(
        ForeignKey("accounts.id"), nullable=False, index=True
    )
    debit: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=Decimal("0")
    )
    credit: Mapped[Decimal] = mapped_column(
        Money, nullable=False, default=Decimal("0")
    )

    transaction: Mapped["Transaction"] = relationship(
        back_populates="lines"
    )
    account: Mapped["Account"] = relationship(lazy="joined")

    def __repr__(self) -> str:
        return (
            f"<TransactionLine account={self.account_id} "
            f"debit={self.debit} credit={self.credit}>"
        )
