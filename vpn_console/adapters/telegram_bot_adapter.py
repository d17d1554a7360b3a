"""Telegram Bot API adapter."""

import io
from typing import Optional
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup


class TelegramBotAdapter:
    """Adapter for Telegram Bot API."""

    def __init__(self, bot_token: str):
        self.bot = Bot(token=bot_token)

    async def send_message(
        self, chat_id: int, text: str, buttons: Optional[list] = None
    ) -> None:
        """Send text message; buttons are (label, callback_data) pairs."""
        markup = None
        if buttons:
            markup = InlineKeyboardMarkup([[
                InlineKeyboardButton(label, callback_data=data)
                for label, data in buttons
            ]])
        await self.bot.send_message(
            chat_id=chat_id, text=text, reply_markup=markup
        )

    async def send_photo(self, chat_id: int, photo: bytes) -> None:
        """Send image."""
        photo_file = io.BytesIO(photo)
        await self.bot.send_photo(chat_id=chat_id, photo=photo_file)

    async def send_document(
        self, chat_id: int, file_data: bytes, filename: str
    ) -> None:
        """Send file."""
        document = io.BytesIO(file_data)
        document.name = filename
        await self.bot.send_document(
            chat_id=chat_id,
            document=document,
            filename=filename
        )

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        """Delete message."""
        await self.bot.delete_message(chat_id=chat_id, message_id=message_id)
