from __future__ import annotations

from fastapi import Header, HTTPException

from checklist_api.settings import get_settings


async def require_backend_token(
    x_backend_token: str | None = Header(default=None, alias="X-Backend-Token"),
) -> None:
    settings = get_settings()
    if not x_backend_token or x_backend_token != settings.backend_session_secret:
        raise HTTPException(status_code=401, detail="Invalid backend token")


async def acting_user_id(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
) -> str | None:
    """Optional owner scope for todo mutations; absent means unscoped."""
    if not x_user_id:
        return None
    return x_user_id.strip() or None
