"""
Pydantic schemas for ledger transactions.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from erp_accounting.models.enums import AccountType
from erp_accounting.schemas.common import Amount


# --- Request Schemas ---

class TransactionLineCreate(BaseModel):
    """
    One line of a transaction.

    Exactly one of debit/credit must be positive, with at most 4
    decimal places. Both rules are checked by the LedgerService
    so the error can name the line.
    """
    account_id: int | None = None
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")


class TransactionCreate(BaseModel):
    """Request to record a transaction. date defaults to now."""
    date: datetime | None = None
    description: str | None = None
    lines: list[TransactionLineCreate] = Field(default_factory=list)


# --- Response Schemas ---

class LineAccount(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType

    model_config = {"from_attributes": True}


class TransactionLineResponse(BaseModel):
    id: int
    position: int
    account_id: int
    account: LineAccount
    debit: Amount
    credit: Amount

    model_config = {"from_attributes": True}


class TransactionResponse(BaseModel):
    id: int
    date: datetime
    description: str
    created_by: str
    created_at: datetime
    lines: list[TransactionLineResponse]
    total_debit: Amount
    total_credit: Amount

    model_config = {"from_attributes": True}
