"""Single shared context handed to every command handler."""

from ..interfaces import (
    IPanelGateway,
    IMessagingProvider,
    IQRGenerator,
    ILogSink,
)
from .query_cache import QueryCache
from .session_manager import SessionManager
from .client_registry import ClientRegistry
from .connectivity_monitor import ConnectivityMonitor, POLL_INTERVAL
from .settings_store import SettingsStore
from .dashboard import Dashboard


class Console:
    """Wires the panel components around one gateway and one cache."""

    def __init__(
        self,
        gateway: IPanelGateway,
        messaging: IMessagingProvider,
        qr: IQRGenerator,
        logger: ILogSink,
        poll_interval: float = POLL_INTERVAL
    ):
        self.gateway = gateway
        self.messaging = messaging
        self.qr = qr
        self.logger = logger

        self.cache = QueryCache()
        self.session = SessionManager(gateway, logger)
        self.registry = ClientRegistry(gateway, self.cache, logger)
        self.monitor = ConnectivityMonitor(
            gateway,
            logger,
            interval=poll_interval,
            active=lambda: self.session.authenticated
        )
        self.settings = SettingsStore(gateway, self.cache, logger)
        self.dashboard = Dashboard(self.registry, self.monitor, logger)
