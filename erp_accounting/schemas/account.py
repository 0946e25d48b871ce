"""
Pydantic schemas for chart of accounts operations.

Request fields are deliberately permissive: required-field and
reference checks belong to ChartOfAccountsService, which reports
them as domain errors.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from erp_accounting.models.enums import AccountType
from erp_accounting.schemas.common import Amount


# --- Request Schemas ---

class AccountCreate(BaseModel):
    """Request to create an account."""
    code: str | None = None
    name: str | None = None
    account_type: AccountType | None = None
    parent_id: int | None = None
    is_group: bool = False
    description: str | None = Field(default=None, max_length=2000)


class AccountUpdate(BaseModel):
    """
    Partial update of an account.

    Only fields present in the request are applied. The account
    type is not patchable.
    """
    code: str | None = None
    name: str | None = None
    parent_id: int | None = None
    is_group: bool | None = None
    description: str | None = Field(default=None, max_length=2000)


# --- Response Schemas ---

class AccountSummary(BaseModel):
    id: int
    code: str
    name: str

    model_config = {"from_attributes": True}


class AccountResponse(BaseModel):
    id: int
    code: str
    name: str
    account_type: AccountType
    parent_id: int | None
    parent: AccountSummary | None
    is_group: bool
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class AccountBalanceResponse(BaseModel):
    account_id: int
    account_code: str
    account_type: AccountType
    balance: Amount
