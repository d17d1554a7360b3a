"""Panel state components: session, registry, monitor, dashboard."""

from .query_cache import QueryCache
from .session_manager import SessionManager, SessionState
from .client_registry import ClientRegistry
from .connectivity_monitor import (
    ConnectivityMonitor,
    format_bytes,
    format_handshake,
    is_online,
)
from .settings_store import SettingsStore
from .dashboard import ClientRow, CreateClientForm, Dashboard, join
from .console import Console

__all__ = [
    'QueryCache',
    'SessionManager',
    'SessionState',
    'ClientRegistry',
    'ConnectivityMonitor',
    'format_bytes',
    'format_handshake',
    'is_online',
    'SettingsStore',
    'ClientRow',
    'CreateClientForm',
    'Dashboard',
    'join',
    'Console',
]
