"""Cache-backed CRUD over peer records."""

import asyncio
from typing import Optional
from ..errors import ValidationFailure
from ..interfaces import Client, ClientPatch, IPanelGateway, ILogSink

CLIENTS_KEY = "clients"


def client_key(client_id: str) -> tuple:
    return ("client", client_id)


def clean_name(name: str) -> str:
    """Trimmed client name; blank names never reach the server."""
    name = (name or "").strip()
    if not name:
        raise ValidationFailure("Client name must not be empty")
    return name


class ClientRegistry:
    """Peer records as last confirmed by the server.

    Mutations never touch cached values: on success they invalidate, and
    the next read goes back to the server.
    """

    def __init__(self, gateway: IPanelGateway, cache, logger: ILogSink):
        self.gateway = gateway
        self.cache = cache
        self.logger = logger

    async def list(
        self, stale_after: Optional[float] = None
    ) -> list[Client]:
        """Cached list; ``stale_after=0`` always asks the server again."""
        return await self.cache.fetch(
            CLIENTS_KEY,
            lambda: asyncio.to_thread(self.gateway.list_clients),
            stale_after
        )

    async def get(
        self, client_id: str, stale_after: Optional[float] = None
    ) -> Client:
        return await self.cache.fetch(
            client_key(client_id),
            lambda: asyncio.to_thread(self.gateway.get_client, client_id),
            stale_after
        )

    def _invalidate(self, client_id: Optional[str] = None) -> None:
        if client_id is None:
            self.cache.invalidate(CLIENTS_KEY)
        else:
            self.cache.invalidate(CLIENTS_KEY, client_key(client_id))

    async def create(self, name: str) -> Client:
        name = clean_name(name)
        client = await asyncio.to_thread(self.gateway.create_client, name)
        self._invalidate()
        self.logger.log("info", f"Client {name} created")
        return client

    async def update(self, client_id: str, patch: ClientPatch) -> Client:
        client = await asyncio.to_thread(
            self.gateway.update_client, client_id, patch
        )
        self._invalidate(client_id)
        self.logger.log("info", f"Client {client_id} updated")
        return client

    async def rename(self, client_id: str, name: str) -> Client:
        return await self.update(client_id, ClientPatch(name=clean_name(name)))

    async def set_expiry(self, client_id: str, expires_at: str) -> Client:
        # server keeps the stored value when the field is absent
        expires_at = (expires_at or "").strip()
        if not expires_at:
            raise ValidationFailure("Expiry date must not be empty")
        return await self.update(
            client_id, ClientPatch(expires_at=expires_at)
        )

    async def remove(self, client_id: str) -> None:
        await asyncio.to_thread(self.gateway.delete_client, client_id)
        self._invalidate(client_id)
        self.logger.log("info", f"Client {client_id} removed")

    async def enable(self, client_id: str) -> None:
        await asyncio.to_thread(self.gateway.enable_client, client_id)
        self._invalidate(client_id)
        self.logger.log("info", f"Client {client_id} enabled")

    async def disable(self, client_id: str) -> None:
        await asyncio.to_thread(self.gateway.disable_client, client_id)
        self._invalidate(client_id)
        self.logger.log("info", f"Client {client_id} disabled")

    def qrcode_url(self, client_id: str) -> str:
        return self.gateway.qrcode_url(client_id)

    def configuration_url(self, client_id: str) -> str:
        return self.gateway.configuration_url(client_id)

    async def configuration(self, client_id: str) -> str:
        """Configuration text for delivery; not kept in the registry."""
        return await asyncio.to_thread(
            self.gateway.download_configuration, client_id
        )
