import hmac
from typing import Optional

from fastapi import Header, HTTPException, Request, status

from core.config import settings
from core.logging import get_module_logger
from modules.events.connectivity import ConnectivityProber
from modules.events.service import EventService

logger = get_module_logger()


def get_event_service(request: Request) -> EventService:
    """The EventService built by the application lifespan."""
    service = getattr(request.app.state, "event_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Event service is not ready",
        )
    return service


def get_prober(request: Request) -> Optional[ConnectivityProber]:
    return getattr(request.app.state, "prober", None)


def require_admin(
    request: Request,
    x_admin_token: Optional[str] = Header(default=None),
) -> None:
    """Guard moderation endpoints with the shared admin token."""
    expected = settings.server.ADMIN_API_TOKEN
    if not expected:
        logger.warning("admin_token_not_configured", path=request.url.path)
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Moderation is disabled",
        )
    if not x_admin_token or not hmac.compare_digest(x_admin_token, expected):
        logger.warning(
            "admin_token_rejected",
            path=request.url.path,
            ip_address=request.client.host if request.client else "unknown",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin token",
        )
