"""Polling monitor for peer traffic and handshake recency."""

import asyncio
import time
from datetime import datetime
from typing import Callable, Optional
from ..errors import AuthFailure, PanelError
from ..interfaces import IPanelGateway, ILogSink, PeerStats

POLL_INTERVAL = 10.0
ONLINE_THRESHOLD_SECONDS = 150  # 2.5 minutes
PLACEHOLDER = "—"


def is_online(
    last_handshake_secs: Optional[int], now: Optional[float] = None
) -> bool:
    """Handshake within the threshold. 0 means no handshake yet."""
    if not last_handshake_secs:
        return False
    if now is None:
        now = time.time()
    return now - last_handshake_secs < ONLINE_THRESHOLD_SECONDS


def format_bytes(b: int) -> str:
    if b < 1024:
        return "{} B".format(int(b))
    if b < 1024 * 1024:
        return "{:.1f} KB".format(b / 1024)
    if b < 1024 * 1024 * 1024:
        return "{:.1f} MB".format(b / 1024 / 1024)

    return "{:.2f} GB".format(b / 1024 / 1024 / 1024)


def format_handshake(last_handshake_secs: Optional[int]) -> str:
    if not last_handshake_secs:
        return PLACEHOLDER
    return datetime.fromtimestamp(last_handshake_secs).strftime(
        "%Y-%m-%d %H:%M:%S"
    )


class ConnectivityMonitor:
    """Periodic stats fetch, owner of the current stats snapshot.

    Every successful poll replaces the snapshot wholesale. A failed poll
    keeps the previous one and the loop carries on at the next tick. Ticks
    where ``active()`` is false are skipped without a request.
    """

    def __init__(
        self,
        gateway: IPanelGateway,
        logger: ILogSink,
        interval: float = POLL_INTERVAL,
        active: Callable[[], bool] = lambda: True
    ):
        self.gateway = gateway
        self.logger = logger
        self.interval = interval
        self.active = active
        self._stats: list[PeerStats] = []
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def snapshot(self) -> list[PeerStats]:
        return list(self._stats)

    async def refresh(self) -> bool:
        """One poll cycle. Returns False when the snapshot was kept."""
        try:
            stats = await asyncio.to_thread(self.gateway.get_stats)
        except AuthFailure as e:
            # session lapsed; handlers report it on the next command
            self.logger.log("debug", f"Stats poll refused, keeping last: {e}")
            return False
        except PanelError as e:
            self.logger.log("warn", f"Stats poll failed, keeping last: {e}")
            return False

        self._stats = list(stats)
        return True

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            if self.active():
                await self.refresh()
            next_tick += self.interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    def start(self) -> None:
        if self.running:
            return
        self.logger.log("info", f"Stats polling every {self.interval}s")
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        task, self._task = self._task, None
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self.logger.log("info", "Stats polling stopped")
