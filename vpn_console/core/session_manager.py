"""Operator session state machine."""

import asyncio
from enum import Enum
from typing import Optional
from ..errors import PanelError
from ..interfaces import IPanelGateway, ILogSink

TOTP_MAX_LENGTH = 6


class SessionState(Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionManager:
    """Owns "am I logged in, as whom".

    ``login`` and ``logout`` are the only mutators. Each operation is
    attempted once; callers decide whether to retry.
    """

    def __init__(self, gateway: IPanelGateway, logger: ILogSink):
        self.gateway = gateway
        self.logger = logger
        self._state = SessionState.UNKNOWN
        self._username: Optional[str] = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def authenticated(self) -> bool:
        return self._state is SessionState.AUTHENTICATED

    @property
    def username(self) -> Optional[str]:
        return self._username

    def _set(self, authenticated: bool, username: Optional[str]) -> None:
        if authenticated:
            self._state = SessionState.AUTHENTICATED
            self._username = username
        else:
            self._state = SessionState.UNAUTHENTICATED
            self._username = None

    async def initialize(self) -> SessionState:
        """Ask the server who we are. Never raises."""
        try:
            info = await asyncio.to_thread(self.gateway.check_session)
        except PanelError as e:
            self.logger.log("warn", f"Session check failed: {e}")
            self._set(False, None)
            return self._state

        self._set(info.authenticated, info.username)
        return self._state

    async def login(
        self,
        username: str,
        password: str,
        totp_code: Optional[str] = None
    ) -> bool:
        """Send credentials; False on any kind of failure."""
        totp = (totp_code or "").strip()[:TOTP_MAX_LENGTH] or None

        try:
            info = await asyncio.to_thread(
                self.gateway.login, username, password, totp
            )
        except PanelError as e:
            self.logger.log("warn", f"Login failed: {e}")
            self._set(False, None)
            return False

        if not info.authenticated:
            self.logger.log("warn", f"Login rejected for {username}")
            self._set(False, None)
            return False

        self._set(True, info.username or username)
        self.logger.log("info", f"Logged in as {self._username}")
        return True

    async def logout(self) -> None:
        """Best effort: local state is cleared whatever the server says."""
        try:
            await asyncio.to_thread(self.gateway.logout)
        except PanelError as e:
            self.logger.log("warn", f"Logout request failed: {e}")
        finally:
            self._set(False, None)

    async def ensure(
        self, username: str = "", password: str = "", totp_code: str = ""
    ) -> bool:
        """Startup check, then one login with configured credentials."""
        await self.initialize()
        if self.authenticated or not (username and password):
            return self.authenticated
        return await self.login(username, password, totp_code)
