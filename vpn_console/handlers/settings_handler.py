"""Handlers for interface and server-wide configuration."""

import asyncio
from dataclasses import fields
from telegram import Update
from ..interfaces import ConfigPatch, InterfacePatch
from .base_handler import BaseHandler

CONFIG_FIELDS = [f.name for f in fields(ConfigPatch)]


def _number_or_text(value: str):
    """Digits become int, anything else goes to the server as typed."""
    return int(value) if value.isdigit() else value


class SettingsHandler(BaseHandler):
    """Handler for /settings command."""

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        settings = self.console.settings
        iface, config = await asyncio.gather(
            settings.interface(stale_after=0), settings.config(stale_after=0)
        )

        await self.reply(
            chat_id,
            "⚙️ Interface\n"
            f"   Name: {iface.name}\n"
            f"   Public key: {iface.public_key}\n"
            f"   Listen port: {iface.listen_port}\n"
            f"   IPv4: {iface.ipv4_cidr}\n"
            f"   IPv6: {iface.ipv6_cidr or '—'}\n\n"
            "🌐 Defaults\n"
            f"   Host: {config.wg_host}:{config.wg_port}\n"
            f"   DNS: {config.wg_default_dns}\n"
            f"   Allowed IPs: {config.wg_allowed_ips}\n"
            f"   Address: {config.wg_default_address}"
        )


class SetPortHandler(BaseHandler):
    """Handler for /setport command."""

    usage = "/setport <port>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if not args:
            await self.send_usage(chat_id)
            return

        patch = InterfacePatch(listen_port=_number_or_text(args[0]))
        await self.console.settings.update_interface(patch)
        await self.reply(chat_id, f"✅ Listen port set to {args[0]}")


class SetCidrHandler(BaseHandler):
    """Handler for /setcidr command."""

    usage = "/setcidr <cidr>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if not args:
            await self.send_usage(chat_id)
            return

        await self.console.settings.update_interface(
            InterfacePatch(ipv4_cidr=args[0])
        )
        await self.reply(chat_id, f"✅ IPv4 range set to {args[0]}")


class SetConfigHandler(BaseHandler):
    """Handler for /setconfig command."""

    usage = "/setconfig <field> <value>\n\nFields: " + ", ".join(CONFIG_FIELDS)

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if len(args) < 2 or args[0] not in CONFIG_FIELDS:
            await self.send_usage(chat_id)
            return

        field, value = args[0], " ".join(args[1:])
        if field == "wg_port":
            value = _number_or_text(value)

        patch = ConfigPatch(**{field: value})
        await self.console.settings.update_config(patch)
        await self.reply(chat_id, f"✅ {field} set to {value}")
