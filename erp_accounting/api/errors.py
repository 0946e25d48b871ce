"""
Translation of accounting errors into HTTP errors.

Routes catch AccountingError, roll back, and raise the result
of to_http_exception(). Unclassified errors are left to
FastAPI's default 500 handling.
"""

from fastapi import HTTPException

from erp_accounting.services.exceptions import (
    AccountingError,
    ConflictError,
    ImbalancedTransactionError,
    NotFoundError,
    ValidationError,
)

STATUS_CODES: dict[type[AccountingError], int] = {
    ValidationError: 400,
    ImbalancedTransactionError: 400,
    NotFoundError: 404,
    ConflictError: 409,
}


def to_http_exception(exc: AccountingError) -> HTTPException:
    status_code = STATUS_CODES.get(type(exc), 400)
    if isinstance(exc, ImbalancedTransactionError):
        return HTTPException(status_code=status_code, detail={
            "message": str(exc),
            "total_debit": float(exc.total_debit),
            "total_credit": float(exc.total_credit),
        })
    return HTTPException(status_code=status_code, detail=str(exc))
