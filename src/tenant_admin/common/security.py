"""Admin token authentication dependency."""

import hmac
from typing import Optional

from fastapi import Header, HTTPException, Query


async def require_admin_token(
    authorization: Optional[str] = Header(None),
    token: Optional[str] = Query(None),
) -> str:
    """FastAPI dependency that checks the admin token.

    Accepts ``Authorization: Bearer <token>`` or a ``?token=`` query parameter.
    """
    from tenant_admin.common.config import get_settings

    settings = get_settings()
    supplied = token
    if authorization:
        supplied = authorization.removeprefix("Bearer ").strip()
    # compare_digest rejects non-ASCII str, so compare encoded bytes
    if not supplied or not hmac.compare_digest(
        supplied.encode("utf-8"), settings.admin_token.encode("utf-8")
    ):
        raise HTTPException(status_code=401, detail="Unauthorized")
    return supplied
