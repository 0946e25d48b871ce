"""
Transaction API endpoints.

Transactions can be recorded, read and deleted. There is no
update endpoint: a recorded transaction is immutable.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from erp_accounting.api.dependencies import get_actor
from erp_accounting.api.errors import to_http_exception
from erp_accounting.models.base import get_db
from erp_accounting.services.exceptions import AccountingError
from erp_accounting.services.ledger_service import LedgerService
from erp_accounting.schemas.transaction import (
    TransactionCreate,
    TransactionResponse,
)

router = APIRouter(prefix="/transactions", tags=["Transactions"])


@router.post("", response_model=TransactionResponse, status_code=201)
def record_transaction(
    request: TransactionCreate,
    actor: str = Depends(get_actor),
    db: Session = Depends(get_db),
):
    """
    Record a balanced transaction.

    Every line needs either a debit or a credit, and total
    debits must equal total credits. An unbalanced request is
    answered with 400 and both totals.
    """
    service = LedgerService(db)
    try:
        txn = service.record_transaction(request, created_by=actor)
        db.commit()
        return txn
    except AccountingError as e:
        db.rollback()
        raise to_http_exception(e)


@router.get("", response_model=list[TransactionResponse])
def list_transactions(db: Session = Depends(get_db)):
    return LedgerService(db).list_transactions()


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Get transaction details with its lines."""
    service = LedgerService(db)
    try:
        return service.get_transaction(transaction_id)
    except AccountingError as e:
        raise to_http_exception(e)


@router.delete("/{transaction_id}")
def delete_transaction(
    transaction_id: int,
    db: Session = Depends(get_db),
):
    """Hard-delete a transaction. Reports stop reflecting it at once."""
    service = LedgerService(db)
    try:
        service.delete_transaction(transaction_id)
        db.commit()
    except AccountingError as e:
        db.rollback()
        raise to_http_exception(e)
    return {"message": f"Transaction {transaction_id} deleted"}
