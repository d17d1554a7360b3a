"""Panel console bot - main entry point."""

import sys
from telegram.ext import Application, CallbackQueryHandler, CommandHandler
from .config import (
    BOT_TOKEN,
    LOG_LEVEL,
    PANEL_URL,
    PANEL_USERNAME,
    PANEL_PASSWORD,
    PANEL_TOTP,
    REQUEST_TIMEOUT,
    STATS_POLL_INTERVAL,
)
from .adapters import (
    PanelAPIAdapter,
    TelegramBotAdapter,
    QRCodeAdapter,
    StdoutAdapter
)
from .core import Console
from .handlers import COMMAND_HANDLERS, CALLBACK_HANDLERS


def build_console() -> Console:
    """Mount adapters and panel components."""
    logger = StdoutAdapter(min_level=LOG_LEVEL)
    gateway = PanelAPIAdapter(
        base_url=PANEL_URL,
        logger=logger,
        timeout=REQUEST_TIMEOUT
    )
    return Console(
        gateway=gateway,
        messaging=TelegramBotAdapter(bot_token=BOT_TOKEN),
        qr=QRCodeAdapter(),
        logger=logger,
        poll_interval=STATS_POLL_INTERVAL
    )


def main() -> None:
    """Main bot initialization."""
    # Validate config (early return)
    if not BOT_TOKEN:
        print("ERROR: BOT_TOKEN not set", file=sys.stderr)
        sys.exit(1)

    console = build_console()
    logger = console.logger

    logger.log("info", "Starting panel console bot")
    logger.log("info", f"Panel URL: {PANEL_URL}")

    async def on_startup(app: Application) -> None:
        await console.session.ensure(
            PANEL_USERNAME, PANEL_PASSWORD, PANEL_TOTP
        )
        logger.log("info", f"Session: {console.session.state.value}")
        console.monitor.start()

    async def on_shutdown(app: Application) -> None:
        await console.monitor.stop()

    app = (
        Application.builder()
        .token(BOT_TOKEN)
        .post_init(on_startup)
        .post_shutdown(on_shutdown)
        .build()
    )

    # Register command handlers (table-driven)
    for command, handler_class in COMMAND_HANDLERS.items():
        handler = handler_class(console)
        app.add_handler(CommandHandler(command, handler.handle))
        logger.log("info", f"Registered handler: /{command}")

    for pattern, handler_class in CALLBACK_HANDLERS.items():
        handler = handler_class(console)
        app.add_handler(CallbackQueryHandler(handler.handle, pattern=pattern))

    logger.log("info", "Bot started - polling for updates")
    app.run_polling(allowed_updates=['message', 'callback_query'])


if __name__ == "__main__":
    main()
