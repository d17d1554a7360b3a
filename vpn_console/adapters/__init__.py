"""Adapter implementations for the console."""

from .panel_api_adapter import PanelAPIAdapter
from .telegram_bot_adapter import TelegramBotAdapter
from .qr_code_adapter import QRCodeAdapter
from .stdout_adapter import StdoutAdapter

__all__ = [
    'PanelAPIAdapter',
    'TelegramBotAdapter',
    'QRCodeAdapter',
    'StdoutAdapter',
]
