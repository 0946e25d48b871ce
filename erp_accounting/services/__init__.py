"""Business logic services."""

from erp_accounting.services.chart_service import ChartOfAccountsService
from erp_accounting.services.ledger_service import LedgerService
from erp_accounting.services.balance_service import BalanceService
from erp_accounting.services.report_service import ReportService

__all__ = [
    "ChartOfAccountsService",
    "LedgerService",
    "BalanceService",
    "ReportService",
]
