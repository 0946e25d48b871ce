"""
Financial report endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from erp_accounting.models.base import get_db
from erp_accounting.services.report_service import ReportService
from erp_accounting.schemas.report import BalanceSheet, IncomeStatement

router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/balance-sheet", response_model=BalanceSheet)
def balance_sheet(db: Session = Depends(get_db)):
    """Assets, liabilities and capital, each with its total."""
    return ReportService(db).generate_balance_sheet()


@router.get("/income-statement", response_model=IncomeStatement)
def income_statement(db: Session = Depends(get_db)):
    """Income and expenses with their totals and net income."""
    return ReportService(db).generate_income_statement()
