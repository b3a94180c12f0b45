from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies.rate_limits import setup_rate_limiter
from api.router import api_router
from core.config import settings
from core.logging import get_module_logger
from integrations.cloudinary import UploadFailedError
from modules.events.errors import (
    EventNotFoundError,
    EventStoreError,
    SubmissionFailedError,
)
from server.lifespan import lifespan

logger = get_module_logger()


async def event_not_found_handler(_request: Request, exc: Exception):
    return JSONResponse(status_code=404, content={"message": str(exc)})


async def upload_failed_handler(_request: Request, exc: Exception):
    return JSONResponse(
        status_code=502,
        content={"message": "Image upload failed, please try again", "detail": str(exc)},
    )


async def submission_failed_handler(_request: Request, exc: Exception):
    return JSONResponse(status_code=503, content={"message": str(exc)})


async def event_store_error_handler(request: Request, exc: Exception):
    kind = exc.kind.value if isinstance(exc, EventStoreError) else "unknown"
    logger.error(
        "event_store_request_failed",
        path=request.url.path,
        error_kind=kind,
        error=str(exc),
    )
    return JSONResponse(
        status_code=503,
        content={"message": "Event store unavailable", "error_kind": kind},
    )


def create_app(**kwargs) -> FastAPI:
    app = FastAPI(title="euvou-events", **kwargs)
    setup_rate_limiter(app)

    allow_origins = (
        settings.server.ALLOWED_ORIGINS
        if settings.is_production
        else [
            "http://localhost:3000",
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(EventNotFoundError, event_not_found_handler)
    app.add_exception_handler(EventStoreError, event_store_error_handler)
    app.add_exception_handler(UploadFailedError, upload_failed_handler)
    app.add_exception_handler(SubmissionFailedError, submission_failed_handler)

    app.include_router(api_router)
    return app


handler = create_app(lifespan=lifespan)
