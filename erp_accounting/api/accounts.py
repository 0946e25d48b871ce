"""
Chart of accounts API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from erp_accounting.api.errors import to_http_exception
from erp_accounting.models.base import get_db
from erp_accounting.models.enums import AccountType
from erp_accounting.services.balance_service import BalanceService
from erp_accounting.services.chart_service import ChartOfAccountsService
from erp_accounting.services.exceptions import AccountingError
from erp_accounting.schemas.account import (
    AccountCreate,
    AccountUpdate,
    AccountResponse,
    AccountBalanceResponse,
)

router = APIRouter(tags=["Accounts"])


@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    request: AccountCreate,
    db: Session = Depends(get_db),
):
    """Create an account in the chart of accounts."""
    service = ChartOfAccountsService(db)
    try:
        account = service.create_account(request)
        db.commit()
        return account
    except AccountingError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("/accounts", response_model=list[AccountResponse])
def list_accounts(
    account_type: AccountType | None = None,
    db: Session = Depends(get_db),
):
    """List accounts ordered by code, optionally of a single type."""
    return ChartOfAccountsService(db).list_accounts(account_type)


@router.get("/accounts/{account_id}", response_model=AccountResponse)
def get_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    service = ChartOfAccountsService(db)
    try:
        return service.get_account(account_id)
    except AccountingError as e:
        raise to_http_exception(e)


@router.get(
    "/accounts/{account_id}/children",
    response_model=list[AccountResponse],
)
def list_child_accounts(
    account_id: int,
    db: Session = Depends(get_db),
):
    service = ChartOfAccountsService(db)
    try:
        return service.list_children(account_id)
    except AccountingError as e:
        raise to_http_exception(e)


@router.get(
    "/accounts/{account_id}/balance",
    response_model=AccountBalanceResponse,
)
def get_account_balance(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Get the signed balance of one account.

    Calculated from posted lines on every request.
    """
    service = BalanceService(db)
    try:
        balance = service.compute_balance(account_id)
    except AccountingError as e:
        raise to_http_exception(e)

    account = service.chart.get_account(account_id)
    return AccountBalanceResponse(
        account_id=account.id,
        account_code=account.code,
        account_type=account.account_type,
        balance=balance,
    )


@router.patch("/accounts/{account_id}", response_model=AccountResponse)
def update_account(
    account_id: int,
    request: AccountUpdate,
    db: Session = Depends(get_db),
):
    """Update the fields present in the request body."""
    service = ChartOfAccountsService(db)
    try:
        account = service.update_account(account_id, request)
        db.commit()
        return account
    except AccountingError as e:
        db.rollback()
        raise to_http_exception(e)


@router.delete("/accounts/{account_id}")
def delete_account(
    account_id: int,
    db: Session = Depends(get_db),
):
    """
    Delete an account.

    Refused with 409 while the account has child accounts or
    posted lines.
    """
    service = ChartOfAccountsService(db)
    try:
        service.delete_account(account_id)
        db.commit()
    except AccountingError as e:
        db.rollback()
        raise to_http_exception(e)
    return {"message": f"Account {account_id} deleted"}
