from typing import Annotated

from fastapi import Depends, Header, HTTPException

from deps.services import get_settings
from settings import Settings


def require_admin(
    settings: Annotated[Settings, Depends(get_settings)],
    x_admin_token: Annotated[str | None, Header(alias="x-admin-token")] = None,
) -> None:
    """
    Strict admin-only guard. Requires the X-Admin-Token header to match ADMIN_TOKEN.
    """
    if not settings.admin_token:
        raise HTTPException(status_code=500, detail="ADMIN_TOKEN not configured on server.")
    if x_admin_token != settings.admin_token:
        raise HTTPException(status_code=401, detail="Unauthorized.")
