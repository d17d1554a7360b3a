"""QR code generator interface (adapter pattern)."""

from typing import Protocol


class IQRGenerator(Protocol):
    """Interface for rendering client configurations as QR codes."""

    def generate(self, data: str) -> bytes:
        """Render configuration text as a PNG image."""
        ...
