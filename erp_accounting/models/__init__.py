"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from erp_accounting.models.base import Base
from erp_accounting.models.enums import (
    AccountType,
    BALANCE_SHEET_TYPES,
    INCOME_STATEMENT_TYPES,
)
from erp_accounting.models.account import Account
from erp_accounting.models.transaction import Transaction, TransactionLine

__all__ = [
    "Base",
    "AccountType",
    "BALANCE_SHEET_TYPES",
    "INCOME_STATEMENT_TYPES",
    "Account",
    "Transaction",
    "TransactionLine",
]
