from typing import Optional

from fastapi import APIRouter, Depends, Request

from api.dependencies.events import get_prober
from api.dependencies.rate_limits import get_limiter
from core.config import settings
from modules.events.connectivity import ConnectivityProber, ConnectivityStatus

router = APIRouter(tags=["System"])
limiter = get_limiter()


# Load balancer health checks hit these every few seconds
@router.get("/version")
@limiter.limit("50/minute")
def get_version(request: Request):  # pylint: disable=unused-argument
    """Get the version of the application."""
    return {"version": settings.GIT_SHA}


@router.get("/health")
@limiter.limit("50/minute")
def get_health(request: Request):  # pylint: disable=unused-argument
    """Healthcheck endpoint."""
    return {"status": "ok"}


@router.get("/connectivity")
@limiter.limit("60/minute")
def get_connectivity(
    request: Request,  # pylint: disable=unused-argument
    prober: Optional[ConnectivityProber] = Depends(get_prober),
):
    """Remote store reachability as last observed by the connectivity prober."""
    status = prober.status if prober else ConnectivityStatus(False, True)
    return {"is_connected": status.is_connected, "is_loading": status.is_loading}
