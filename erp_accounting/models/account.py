"""
Account model (chart of accounts).

Accounts form a forest: each account stores only its parent's
id. Children are found by querying parent_id, there is no
child collection on the model.
"""

from datetime import datetime

from sqlalchemy import (
    String, Boolean, DateTime, Text, ForeignKey,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from erp_accounting.models.base import Base
from erp_accounting.models.enums import AccountType


class Account(Base):
    """
    A single account in the chart of accounts.

    The type is fixed at creation; it decides which report the
    account appears in and how its balance is signed.
    """

    __tablename__ = "accounts"

    id: Mapped[int] = mapped_column(primary_key=True)
    # Unique constraint is the authoritative guard against
    # duplicate codes; the service check is only a fast path.
    code: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(150), nullable=False)
    account_type: Mapped[AccountType] = mapped_column(
        SAEnum(
            AccountType,
            name="account_type_enum",
            values_callable=lambda e: [m.value for m in e],
            create_constraint=True,
        ),
        nullable=False,
        index=True,
    )
    parent_id: Mapped[int | None] = mapped_column(
        ForeignKey("accounts.id"), nullable=True, index=True
    )
    is_group: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Many-to-one only; never a back-populated children list
    parent: Mapped["Account | None"] = relationship(remote_side=[id])

    def __repr__(self) -> str:
        return f"<Account {self.code} ({self.account_type.value})>"
