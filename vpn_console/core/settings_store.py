"""Interface and server-wide config, read-mostly."""

import asyncio
from typing import Optional
from ..interfaces import (
    ConfigPatch,
    IPanelGateway,
    ILogSink,
    Interface,
    InterfacePatch,
    PanelConfig,
)

INTERFACE_KEY = "interface"
CONFIG_KEY = "config"


class SettingsStore:
    """Cached reads, invalidate-on-success updates.

    Values are forwarded as given; the server validates them.
    """

    def __init__(self, gateway: IPanelGateway, cache, logger: ILogSink):
        self.gateway = gateway
        self.cache = cache
        self.logger = logger

    async def interface(
        self, stale_after: Optional[float] = None
    ) -> Interface:
        return await self.cache.fetch(
            INTERFACE_KEY,
            lambda: asyncio.to_thread(self.gateway.get_interface),
            stale_after
        )

    async def update_interface(self, patch: InterfacePatch) -> bool:
        if patch.is_empty():
            return False
        await asyncio.to_thread(self.gateway.update_interface, patch)
        self.cache.invalidate(INTERFACE_KEY)
        self.logger.log("info", f"Interface updated: {patch.to_payload()}")
        return True

    async def config(
        self, stale_after: Optional[float] = None
    ) -> PanelConfig:
        return await self.cache.fetch(
            CONFIG_KEY,
            lambda: asyncio.to_thread(self.gateway.get_config),
            stale_after
        )

    async def update_config(self, patch: ConfigPatch) -> bool:
        if patch.is_empty():
            return False
        await asyncio.to_thread(self.gateway.update_config, patch)
        self.cache.invalidate(CONFIG_KEY)
        self.logger.log("info", f"Config updated: {patch.to_payload()}")
        return True
