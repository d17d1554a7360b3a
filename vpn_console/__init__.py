"""Telegram control surface for a WireGuard peer-management panel."""

__version__ = "0.1.0"
