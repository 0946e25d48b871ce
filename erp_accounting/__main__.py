"""
Run the API server.

Usage:
    python -m erp_accounting
"""

import uvicorn

from erp_accounting.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(
        "erp_accounting.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )
