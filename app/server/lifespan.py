from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from structlog.stdlib import BoundLogger

from core.config import Settings, settings
from core.logging import configure_logging, get_module_logger
from modules.events.connectivity import ConnectivityProber
from modules.events.service import build_event_service


def _list_configs(app_settings: Settings, logger: BoundLogger) -> None:
    config_settings: dict[str, list[object]] = {"settings": []}

    for key, value in app_settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    configure_logging(log_level=settings.LOG_LEVEL, is_production=settings.is_production)
    logger = get_module_logger()

    logger.info("application_startup")
    _list_configs(settings, logger)

    service = build_event_service()
    prober = ConnectivityProber(
        service.probe,
        interval_seconds=settings.events.CONNECTIVITY_PROBE_INTERVAL_SECONDS,
    )
    app.state.event_service = service
    app.state.prober = prober
    prober.start()

    yield

    logger.info("application_shutdown")
    await prober.stop()
