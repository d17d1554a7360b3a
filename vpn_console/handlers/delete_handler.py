"""Handlers for /delete command and its confirmation buttons."""

from telegram import Update
from .base_handler import BaseHandler

CALLBACK_PREFIX = "delete"


class DeleteHandler(BaseHandler):
    """Handler for /delete command - asks before removing."""

    usage = "/delete <client_id>\n\nUse /clients for the list of clients."

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        if not args:
            await self.send_usage(chat_id)
            return

        client_id = args[0]
        self.console.dashboard.request_removal(client_id)
        await self.reply(
            chat_id,
            f"⚠️ Delete client {client_id}? This cannot be undone.",
            [
                ("Delete", f"{CALLBACK_PREFIX}:yes:{client_id}"),
                ("Cancel", f"{CALLBACK_PREFIX}:no:{client_id}"),
            ]
        )


class DeleteConfirmHandler(BaseHandler):
    """Handler for the Delete/Cancel buttons."""

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        query = update.callback_query
        await query.answer()

        _, answer, client_id = query.data.split(":", 2)
        dashboard = self.console.dashboard

        if answer != "yes":
            dashboard.cancel_removal(client_id)
            await self.reply(chat_id, f"Deletion of {client_id} cancelled")
            return

        await dashboard.confirm_removal(client_id)
        self.logger.log(
            "info",
            f"Admin {update.effective_user.id} removed client {client_id}"
        )
        await self.reply(chat_id, f"✅ Client {client_id} deleted")
