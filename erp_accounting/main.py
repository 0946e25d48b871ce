"""
ERP Accounting Core — FastAPI Application.

This is the entry point for the application.
All routers are registered here.
"""

from fastapi import FastAPI

from erp_accounting.config import get_settings
from erp_accounting.logging_config import setup_logging
from erp_accounting.api.health import router as health_router
from erp_accounting.api.accounts import router as accounts_router
from erp_accounting.api.transactions import router as transactions_router
from erp_accounting.api.reports import router as reports_router

settings = get_settings()

setup_logging(settings.LOG_LEVEL)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Chart of accounts, double-entry ledger, "
        "balance sheet and income statement"
    ),
    debug=settings.DEBUG,
)

# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(reports_router)
