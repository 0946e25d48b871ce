"""
Report service — balance sheet and income statement.

Both reports are read-only views over the current accounts and
transactions, built from BalanceService output. No access
control happens here; callers gate who may read them.
"""

from decimal import Decimal

from sqlalchemy.orm import Session

from erp_accounting.models.enums import (
    AccountType,
    BALANCE_SHEET_TYPES,
    INCOME_STATEMENT_TYPES,
)
from erp_accounting.schemas.report import (
    BalanceSheet,
    IncomeStatement,
    ReportLine,
)
from erp_accounting.services.balance_service import BalanceService


class ReportService:
    """Builds the financial statements from current account balances."""

    def __init__(self, db: Session):
        self.db = db
        self.balance_service = BalanceService(db)

    def _group(self, types: frozenset[AccountType]):
        """
        Group balances by account type.

        Returns (sections, totals), both keyed by AccountType and
        holding an entry for every type requested, even when no
        account of that type exists.
        """
        sections: dict[AccountType, list[ReportLine]] = {t: [] for t in types}
        totals: dict[AccountType, Decimal] = {t: Decimal("0") for t in types}

        balances = self.balance_service.compute_balances(types)
        for account, balance in balances.items():
            sections[account.account_type].append(ReportLine(
                id=account.id,
                code=account.code,
                name=account.name,
                balance=balance,
            ))
            totals[account.account_type] += balance

        return sections, totals

    def generate_balance_sheet(self) -> BalanceSheet:
        """Assets, liabilities and capital with a total per group."""
        sections, totals = self._group(BALANCE_SHEET_TYPES)
        return BalanceSheet(
            asset=sections[AccountType.ASSET],
            liability=sections[AccountType.LIABILITY],
            capital=sections[AccountType.CAPITAL],
            total_asset=totals[AccountType.ASSET],
            total_liability=totals[AccountType.LIABILITY],
            total_capital=totals[AccountType.CAPITAL],
        )

    def generate_income_statement(self) -> IncomeStatement:
        """Income and expenses, their totals, and net income."""
        sections, totals = self._group(INCOME_STATEMENT_TYPES)
        total_income = totals[AccountType.INCOME]
        total_expense = totals[AccountType.EXPENSE]
        return IncomeStatement(
            income=sections[AccountType.INCOME],
            expense=sections[AccountType.EXPENSE],
            total_income=total_income,
            total_expense=total_expense,
            net_income=total_income - total_expense,
        )
