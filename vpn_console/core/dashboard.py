"""Dashboard view model: peers joined with their stats."""

import time
from dataclasses import dataclass
from typing import Callable, Optional
from ..errors import PanelError, ValidationFailure
from ..interfaces import Client, ILogSink, PeerStats
from .connectivity_monitor import (
    PLACEHOLDER,
    format_bytes,
    format_handshake,
    is_online,
)

CONFIRM_TIMEOUT = 300


@dataclass
class ClientRow:
    """One client and its stats; stats is None when the peer has none."""
    client: Client
    stats: Optional[PeerStats]
    online: bool

    @property
    def traffic(self) -> str:
        if self.stats is None:
            return PLACEHOLDER
        return (
            f"↑ {format_bytes(self.stats.tx_bytes)} "
            f"↓ {format_bytes(self.stats.rx_bytes)}"
        )

    @property
    def last_handshake(self) -> str:
        if self.stats is None:
            return PLACEHOLDER
        return format_handshake(self.stats.last_handshake_secs)


def join(
    clients: list[Client],
    stats: list[PeerStats],
    now: Optional[float] = None
) -> list[ClientRow]:
    """Pair each client with stats by public key."""
    if now is None:
        now = time.time()
    stats_map = {s.public_key: s for s in stats}

    rows = []
    for client in clients:
        peer_stats = stats_map.get(client.public_key)
        online = peer_stats is not None and is_online(
            peer_stats.last_handshake_secs, now
        )
        rows.append(ClientRow(client, peer_stats, online))
    return rows


class CreateClientForm:
    """Pending name plus the in-flight guard of the add-client workflow."""

    def __init__(self, registry):
        self.registry = registry
        self.name = ""
        self.submitting = False
        self.error = ""

    async def submit(self) -> Optional[Client]:
        """Create the client; None when rejected or failed (see error)."""
        if self.submitting:
            return None
        if not self.name.strip():
            self.error = "Client name must not be empty"
            return None

        self.error = ""
        self.submitting = True
        try:
            client = await self.registry.create(self.name)
        except PanelError as e:
            self.error = str(e)
            return None
        finally:
            self.submitting = False

        self.name = ""
        return client


class Dashboard:
    """Composes registry and monitor; owns pending removals.

    A removal request lapses after ``confirm_timeout`` seconds.
    """

    def __init__(
        self,
        registry,
        monitor,
        logger: ILogSink,
        clock: Callable[[], float] = time.time,
        confirm_timeout: float = CONFIRM_TIMEOUT
    ):
        self.registry = registry
        self.monitor = monitor
        self.logger = logger
        self.clock = clock
        self.confirm_timeout = confirm_timeout
        self.form = CreateClientForm(registry)
        self._pending_removals: dict[str, float] = {}

    async def rows(self) -> list[ClientRow]:
        # each render asks the server; concurrent renders share the request
        clients = await self.registry.list(stale_after=0)
        return join(clients, self.monitor.snapshot(), self.clock())

    async def add_client(self, name: str) -> Optional[Client]:
        if self.form.submitting:
            self.form.error = "Another client is being created"
            return None
        self.form.name = name
        return await self.form.submit()

    def _prune_removals(self) -> None:
        deadline = self.clock() - self.confirm_timeout
        for client_id, requested_at in list(self._pending_removals.items()):
            if requested_at <= deadline:
                del self._pending_removals[client_id]

    def request_removal(self, client_id: str) -> None:
        self._prune_removals()
        self._pending_removals[client_id] = self.clock()

    def cancel_removal(self, client_id: str) -> None:
        self._pending_removals.pop(client_id, None)

    def removal_pending(self, client_id: str) -> bool:
        self._prune_removals()
        return client_id in self._pending_removals

    async def confirm_removal(self, client_id: str) -> None:
        """Remove only what was asked for and confirmed in time."""
        if not self.removal_pending(client_id):
            raise ValidationFailure(f"No pending removal for {client_id}")
        del self._pending_removals[client_id]
        await self.registry.remove(client_id)
        self.logger.log("info", f"Removal of {client_id} confirmed")
