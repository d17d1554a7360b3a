"""Handlers for client listing and mutation commands."""

from telegram import Update
from .base_handler import BaseHandler

MAX_MESSAGE_LENGTH = 4096  # Telegram's limit per text message


def message_length(text: str) -> int:
    """Length as Telegram counts it, in UTF-16 code units."""
    return len(text.encode("utf-16-le")) // 2


def split_message(blocks: list, limit: int = MAX_MESSAGE_LENGTH) -> list:
    """Pack blocks into messages of at most ``limit`` characters.

    Blocks are kept whole where they fit; a single oversized block is cut
    into pieces of ``limit // 2`` characters, which fit whatever they hold.
    """
    messages = []
    current = ""
    for block in blocks:
        while message_length(block) > limit:
            if current:
                messages.append(current)
                current = ""
            messages.append(block[:limit // 2])
            block = block[limit // 2:]
        if message_length(current + block) > limit:
            messages.append(current)
            current = ""
        current += block
    if current:
        messages.append(current)
    return messages


def format_row(idx: int, row) -> str:
    client = row.client
    online_icon = "🟢" if row.online else "⚪"
    enabled_icon = "✅" if client.is_enabled else "❌"
    text = (
        f"{idx}. {online_icon} {client.name} {enabled_icon}\n"
        f"   ID: {client.id}\n"
        f"   IP: {client.ipv4}\n"
        f"   Traffic: {row.traffic}\n"
        f"   Handshake: {row.last_handshake}\n"
    )
    if client.expires_at:
        text += f"   Expires: {client.expires_at}\n"
    return text + "\n"


class ClientsHandler(BaseHandler):
    """Handler for /clients command."""

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        rows = await self.console.dashboard.rows()

        if not rows:
            await self.reply(chat_id, "📊 No clients yet. Use /add <name>")
            return

        blocks = [f"📊 Clients ({len(rows)}):\n\n"]
        blocks += [format_row(idx, row) for idx, row in enumerate(rows, 1)]
        for message in split_message(blocks):
            await self.reply(chat_id, message)


class AddHandler(BaseHandler):
    """Handler for /add command."""

    usage = "/add <name>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        dashboard = self.console.dashboard
        client = await dashboard.add_client(" ".join(args))

        if client is None:
            await self.reply(chat_id, f"❌ {dashboard.form.error}")
            return

        await self.reply(
            chat_id,
            f"✅ Client {client.name} created\n"
            f"   ID: {client.id}\n"
            f"   IP: {client.ipv4}\n\n"
            f"Use /config {client.id} to get the configuration."
        )


class ToggleHandler(BaseHandler):
    """Handler for /enable and /disable commands."""

    enable = True

    @property
    def usage(self) -> str:
        return "/enable <id>" if self.enable else "/disable <id>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if not args:
            await self.send_usage(chat_id)
            return

        client_id = args[0]
        registry = self.console.registry
        if self.enable:
            await registry.enable(client_id)
            await self.reply(chat_id, f"✅ Client {client_id} enabled")
        else:
            await registry.disable(client_id)
            await self.reply(chat_id, f"⏸ Client {client_id} disabled")


class EnableHandler(ToggleHandler):
    enable = True


class DisableHandler(ToggleHandler):
    enable = False


class RenameHandler(BaseHandler):
    """Handler for /rename command."""

    usage = "/rename <id> <name>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if len(args) < 2:
            await self.send_usage(chat_id)
            return

        name = " ".join(args[1:])
        client = await self.console.registry.rename(args[0], name)
        await self.reply(
            chat_id, f"✅ Client {client.id} renamed to {client.name}"
        )


class ExpireHandler(BaseHandler):
    """Handler for /expire command."""

    usage = "/expire <id> <date>"

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if len(args) < 2:
            await self.send_usage(chat_id)
            return

        client = await self.console.registry.set_expiry(args[0], args[1])
        await self.reply(
            chat_id, f"✅ Client {client.name} expires at {client.expires_at}"
        )
