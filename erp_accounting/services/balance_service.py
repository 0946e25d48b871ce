"""
Balance service — derives per-account balances from the ledger.

Balances are never stored. Every call sums the posted lines
again, so a deleted transaction disappears from every balance
immediately.

Sign convention, applied per account type:
    asset, liability, capital:  debit - credit
    income:                     credit - debit
    expense:                    debit - credit

Liability and capital are NOT flipped to credit-normal: a capital
account funded by a credit reports a negative balance, on the
balance sheet too.
"""

from decimal import Decimal
from typing import Iterable

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from erp_accounting.models.account import Account
from erp_accounting.models.enums import AccountType
from erp_accounting.models.transaction import TransactionLine
from erp_accounting.services.chart_service import ChartOfAccountsService

# Direction of (debit - credit); -1 means the balance is credit - debit
BALANCE_DIRECTION: dict[AccountType, int] = {
    AccountType.ASSET: 1,
    AccountType.LIABILITY: 1,
    AccountType.CAPITAL: 1,
    AccountType.INCOME: -1,
    AccountType.EXPENSE: 1,
}


def signed_balance(
    account_type: AccountType, debits: Decimal, credits: Decimal
) -> Decimal:
    """Apply the account type's sign rule to summed debits and credits."""
    if BALANCE_DIRECTION[account_type] < 0:
        return credits - debits
    return debits - credits


class BalanceService:
    """
    Read-only balance queries over the ledger.

    Takes a database session; never flushes or commits.
    """

    def __init__(self, db: Session):
        self.db = db
        self.chart = ChartOfAccountsService(db)

    def _line_totals(self, *criteria):
        """
        Sum debits and credits per account for lines matching criteria.

        The sums run over integer ten-thousandths and come back as
        exact Decimals through the Money column type.
        """
        return self.db.execute(
            select(
                TransactionLine.account_id,
                func.sum(TransactionLine.debit),
                func.sum(TransactionLine.credit),
            )
            .join(Account, Account.id == TransactionLine.account_id)
            .where(*criteria)
            .group_by(TransactionLine.account_id)
        ).all()

    def compute_balances(
        self, type_filter: Iterable[AccountType]
    ) -> dict[Account, Decimal]:
        """
        Return the signed balance of every account whose type is in
        type_filter, ordered by account code.

        Accounts without postings are included at zero. The
        summing happens in the database, so no transaction set is
        loaded into memory however large the ledger grows.
        """
        types = set(type_filter)
        if not types:
            return {}

        accounts = self.db.execute(
            select(Account)
            .where(Account.account_type.in_(types))
            .order_by(Account.code)
        ).scalars().all()

        balances = {account: Decimal("0") for account in accounts}
        accounts_by_id = {account.id: account for account in accounts}

        for account_id, debits, credits in self._line_totals(
            Account.account_type.in_(types)
        ):
            account = accounts_by_id.get(account_id)
            if account is None:
                # Created between the two queries
                continue
            balances[account] = signed_balance(
                account.account_type, debits, credits
            )

        return balances

    def compute_balance(self, account_id: int) -> Decimal:
        """Signed balance of a single account."""
        account = self.chart.get_account(account_id)
        rows = self._line_totals(TransactionLine.account_id == account_id)
        if not rows:
            return Decimal("0")
        _, debits, credits = rows[0]
        return signed_balance(account.account_type, debits, credits)
