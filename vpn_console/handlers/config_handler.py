"""Handler for /config command - delivers a client configuration."""

from telegram import Update
from .base_handler import BaseHandler


class ConfigHandler(BaseHandler):
    """Handler for /config command."""

    usage = "/config <client_id>"

    async def _send_config(
        self, chat_id: int, client_name: str, config: str, qr_bytes: bytes,
        download_url: str, qrcode_url: str
    ) -> None:
        """Send VPN config to user."""
        await self.messaging.send_document(
            chat_id, config.encode('utf-8'), f"{client_name}.conf"
        )
        await self.messaging.send_photo(chat_id, qr_bytes)
        await self.messaging.send_message(
            chat_id,
            f"✅ Configuration for {client_name}\n\n"
            "1. Download the .conf file OR scan the QR code\n"
            "2. Import it in the WireGuard app\n\n"
            f"Download link: {download_url}\n"
            f"QR code link: {qrcode_url}"
        )

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if not args:
            await self.send_usage(chat_id)
            return

        client_id = args[0]
        registry = self.console.registry
        client = await registry.get(client_id, stale_after=0)
        config = await registry.configuration(client_id)
        qr_bytes = self.console.qr.generate(config)

        await self._send_config(
            chat_id,
            client.name,
            config,
            qr_bytes,
            registry.configuration_url(client_id),
            registry.qrcode_url(client_id)
        )
        self.logger.log("info", f"Configuration of {client.name} sent")
