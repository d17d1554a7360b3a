"""Shared guards for console command handlers."""

from telegram import Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes
from ..config import admin_ids
from ..errors import AuthFailure, PanelError, ValidationFailure


class BaseHandler:
    """Admin whitelist, session guard and error reply around ``run``."""

    requires_session = True
    usage = ""

    def __init__(self, console):
        self.console = console
        self.messaging = console.messaging
        self.logger = console.logger

    def _is_admin(self, user_id: int) -> bool:
        """Check if user is admin."""
        return user_id in admin_ids()

    async def reply(self, chat_id: int, text: str, buttons=None) -> None:
        if buttons:
            await self.messaging.send_message(chat_id, text, buttons)
        else:
            await self.messaging.send_message(chat_id, text)

    async def handle(
        self, update: Update, context: ContextTypes.DEFAULT_TYPE
    ) -> None:
        """Guard, then dispatch to ``run``."""
        chat_id = update.effective_chat.id
        user_id = update.effective_user.id
        args = list(getattr(context, "args", None) or [])

        # Early validation
        if not self._is_admin(user_id):
            self.logger.log("warn", f"Non-admin {user_id} was refused")
            await self.reply(
                chat_id, "❌ Only administrators can use this bot."
            )
            return

        if self.requires_session and not self.console.session.authenticated:
            await self.reply(
                chat_id,
                "🔒 Not logged in. Use /login <username> <password> [totp]"
            )
            return

        try:
            await self.run(update, chat_id, args)
        except ValidationFailure as e:
            await self.reply(chat_id, f"❌ {e}")
        except AuthFailure as e:
            self.logger.log("warn", f"Panel refused session: {e}")
            await self.console.session.initialize()
            await self.reply(
                chat_id, "🔒 Session expired. Use /login again."
            )
        except PanelError as e:
            self.logger.log("error", f"{type(self).__name__} failed: {e}")
            await self.reply(chat_id, f"❌ Error: {e}")
        except TelegramError as e:
            # the reply itself failed, so only the log sees it
            self.logger.log(
                "error", f"{type(self).__name__} reply failed: {e}"
            )

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        raise NotImplementedError

    async def send_usage(self, chat_id: int) -> None:
        await self.reply(chat_id, f"❌ Usage: {self.usage}")
