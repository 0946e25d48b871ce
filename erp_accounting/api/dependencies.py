"""
Request dependencies shared by the routers.
"""

from fastapi import HTTPException, Request

from erp_accounting.config import get_settings


def get_actor(request: Request) -> str:
    """
    Return the acting user's identity.

    Authentication happens upstream; it forwards the user id in
    the header named by ACTOR_HEADER.
    """
    header = get_settings().ACTOR_HEADER
    actor = (request.headers.get(header) or "").strip()
    if not actor:
        raise HTTPException(
            status_code=401, detail=f"Missing {header} header"
        )
    return actor
