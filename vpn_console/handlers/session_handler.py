"""Handlers for /login and /logout commands."""

from telegram import Update
from telegram.error import TelegramError
from .base_handler import BaseHandler

# Same text for every failure so it never tells which credential was wrong
AUTH_FAILED_MSG = "❌ Authentication failed."


class LoginHandler(BaseHandler):
    """Handler for /login command."""

    requires_session = False
    usage = "/login <username> <password> [totp]"

    async def _drop_credentials(self, update: Update, chat_id: int) -> None:
        """Credentials should not stay in chat history."""
        try:
            await self.messaging.delete_message(
                chat_id, update.effective_message.message_id
            )
        except TelegramError as e:
            self.logger.log("warn", f"Could not delete login message: {e}")

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        await self._drop_credentials(update, chat_id)

        if len(args) < 2:
            await self.send_usage(chat_id)
            return

        username, password = args[0], args[1]
        totp_code = args[2] if len(args) > 2 else None

        if await self.console.session.login(username, password, totp_code):
            await self.reply(
                chat_id, f"✅ Logged in as {self.console.session.username}"
            )
            return

        await self.reply(chat_id, AUTH_FAILED_MSG)


class LogoutHandler(BaseHandler):
    """Handler for /logout command."""

    requires_session = False

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        await self.console.session.logout()
        self.logger.log(
            "info", f"User {update.effective_user.id} logged out"
        )
        await self.reply(chat_id, "👋 Logged out.")
