"""Interface definitions for the console adapters."""

from .i_panel_gateway import (
    IPanelGateway,
    SessionInfo,
    Client,
    Interface,
    PeerStats,
    PanelConfig,
    ClientPatch,
    InterfacePatch,
    ConfigPatch,
)
from .i_messaging_provider import IMessagingProvider
from .i_qr_generator import IQRGenerator
from .i_log_sink import ILogSink

__all__ = [
    'IPanelGateway',
    'SessionInfo',
    'Client',
    'Interface',
    'PeerStats',
    'PanelConfig',
    'ClientPatch',
    'InterfacePatch',
    'ConfigPatch',
    'IMessagingProvider',
    'IQRGenerator',
    'ILogSink',
]
