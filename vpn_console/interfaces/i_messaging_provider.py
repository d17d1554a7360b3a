"""Messaging provider interface (adapter pattern)."""

from typing import Optional, Protocol


class IMessagingProvider(Protocol):
    """Interface for messaging operations."""

    async def send_message(
        self, chat_id: int, text: str, buttons: Optional[list] = None
    ) -> None:
        """Send text message, optionally with inline buttons."""
        ...

    async def send_photo(self, chat_id: int, photo: bytes) -> None:
        """Send image."""
        ...

    async def send_document(
        self, chat_id: int, file_data: bytes, filename: str
    ) -> None:
        """Send file."""
        ...

    async def delete_message(self, chat_id: int, message_id: int) -> None:
        """Delete a message (used to drop credentials from chat)."""
        ...
