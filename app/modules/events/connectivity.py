"""Connectivity prober.

Periodically calls a probe coroutine and exposes a loading / connected /
disconnected status. Purely observational: nothing else consults it before
talking to the stores.
"""

import asyncio
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

from core.logging import get_module_logger

logger = get_module_logger()


class ConnectivityState(Enum):
    LOADING = "loading"
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"


@dataclass(frozen=True)
class ConnectivityStatus:
    is_connected: bool
    is_loading: bool

    @classmethod
    def from_state(cls, state: ConnectivityState) -> "ConnectivityStatus":
        return cls(
            is_connected=state == ConnectivityState.CONNECTED,
            is_loading=state == ConnectivityState.LOADING,
        )


class ConnectivityProber:
    """Runs ``probe`` every ``interval_seconds`` in a background task.

    Args:
        probe: Coroutine function returning True when the remote store is reachable
        interval_seconds: Delay between two probes
    """

    def __init__(
        self,
        probe: Callable[[], Awaitable[bool]],
        interval_seconds: float = 10.0,
    ):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._probe = probe
        self.interval_seconds = interval_seconds
        self.state = ConnectivityState.LOADING
        self._task: Optional[asyncio.Task] = None

    @property
    def status(self) -> ConnectivityStatus:
        return ConnectivityStatus.from_state(self.state)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def check(self) -> ConnectivityState:
        """Probe once and record the outcome."""
        try:
            reachable = bool(await self._probe())
        except Exception as e:  # pylint: disable=broad-except
            logger.warning("connectivity_probe_error", error=str(e))
            reachable = False

        new_state = (
            ConnectivityState.CONNECTED if reachable else ConnectivityState.DISCONNECTED
        )
        if new_state != self.state:
            logger.info(
                "connectivity_changed",
                previous=self.state.value,
                current=new_state.value,
            )
        self.state = new_state
        return new_state

    async def run(self) -> None:
        while True:
            await self.check()
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self.run(), name="connectivity-prober")
        logger.info("connectivity_prober_started", interval=self.interval_seconds)

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("connectivity_prober_stopped")
