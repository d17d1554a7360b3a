"""Handler for /start command."""

from telegram import Update
from .base_handler import BaseHandler


class StartHandler(BaseHandler):
    """Handler for /start command."""

    requires_session = False

    async def run(self, update: Update, chat_id: int, args: list) -> None:
        user_id = update.effective_user.id
        self.logger.log("info", f"User {user_id} started bot")

        session = self.console.session
        if session.authenticated:
            status = f"Logged in as {session.username}"
        else:
            status = "Not logged in"

        welcome_msg = (
            "🔐 WireGuard panel console\n\n"
            f"{status}\n\n"
            "Commands:\n"
            "/login <user> <password> [totp] - Log in\n"
            "/logout - Log out\n"
            "/clients - Clients with traffic and status\n"
            "/add <name> - Create client\n"
            "/enable <id>, /disable <id> - Toggle client\n"
            "/rename <id> <name> - Rename client\n"
            "/expire <id> <date> - Set expiry date\n"
            "/delete <id> - Remove client\n"
            "/config <id> - Configuration file and QR code\n"
            "/settings - Interface and defaults\n"
            "/setport <port>, /setcidr <cidr> - Change interface\n"
            "/setconfig <field> <value> - Change defaults"
        )

        await self.reply(chat_id, welcome_msg)
