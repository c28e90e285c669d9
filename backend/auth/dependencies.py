import secrets
from typing import Optional
from fastapi import Header, HTTPException, status
from config.settings import settings


async def require_admin_token(
    x_admin_token: Optional[str] = Header(default=None, alias="X-Admin-Token")
) -> None:
    """
    Dependency guarding moderation endpoints

    Usage in route:
        @router.get("/links/moderate", dependencies=[Depends(require_admin_token)])

    Args:
        x_admin_token: Value of the X-Admin-Token header

    Raises:
        HTTPException: 401 if no admin token is configured, the header is
        missing, or it does not match
    """
    expected = settings.ADMIN_TOKEN
    if not expected or not x_admin_token or not secrets.compare_digest(x_admin_token, expected):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
        )
