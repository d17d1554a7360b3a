"""Panel REST API adapter."""

from typing import Any, Callable, Optional, TypeVar
import requests
from ..errors import (
    AuthFailure,
    Conflict,
    NotFound,
    TransportFailure,
)
from ..interfaces import (
    Client,
    ClientPatch,
    ConfigPatch,
    ILogSink,
    Interface,
    InterfacePatch,
    PanelConfig,
    PeerStats,
    SessionInfo,
)

T = TypeVar("T")

# Status code -> error class (table-driven)
STATUS_ERRORS = {
    401: AuthFailure,
    403: AuthFailure,
    404: NotFound,
    409: Conflict,
}


class PanelAPIAdapter:
    """Adapter for the panel HTTP API.

    The session cookie lives in the ``requests.Session`` cookie jar, so
    every call after a successful login is credentialed.
    """

    def __init__(
        self,
        base_url: str,
        logger: ILogSink,
        timeout: float = 10
    ):
        self.base_url = base_url.rstrip('/')
        self.logger = logger
        self.timeout = timeout
        self.http = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _request(
        self, method: str, path: str, json: Optional[dict] = None
    ) -> requests.Response:
        """Issue one request, map failures onto the error taxonomy."""
        try:
            resp = self.http.request(
                method,
                self._url(path),
                json=json,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            self.logger.log("error", f"{method} {path} failed: {e}")
            raise TransportFailure(f"{method} {path}: {e}") from e

        if resp.status_code < 400:
            return resp

        detail = self._error_detail(resp)
        self.logger.log(
            "error", f"{method} {path} -> {resp.status_code} {detail}"
        )
        error_cls = STATUS_ERRORS.get(resp.status_code, TransportFailure)
        raise error_cls(
            f"{method} {path} -> {resp.status_code} {detail}".rstrip(),
            status=resp.status_code
        )

    @staticmethod
    def _error_detail(resp: requests.Response) -> str:
        """Server puts the reason under "error"; fall back to raw text."""
        try:
            data = resp.json()
        except ValueError:
            return resp.text[:200]
        if isinstance(data, dict):
            return str(data.get("error", ""))
        return ""

    def _json(
        self, method: str, path: str, json: Optional[dict] = None
    ) -> Any:
        resp = self._request(method, path, json)
        try:
            return resp.json()
        except ValueError as e:
            raise TransportFailure(f"{method} {path}: invalid JSON") from e

    def _parse(self, path: str, build: Callable[[Any], T], data: Any) -> T:
        """Build records from a payload, reporting shape errors."""
        try:
            return build(data)
        except (TypeError, KeyError, AttributeError) as e:
            raise TransportFailure(f"{path}: unexpected payload") from e

    # Session

    def check_session(self) -> SessionInfo:
        data = self._json("GET", "/api/session")
        return self._parse("/api/session", SessionInfo.from_dict, data)

    def login(
        self, username: str, password: str, totp_code: Optional[str] = None
    ) -> SessionInfo:
        """Create a session; a rejected login is authenticated=False."""
        body = {"username": username, "password": password}
        if totp_code:
            body["totp_code"] = totp_code

        try:
            data = self._json("POST", "/api/session", body)
        except AuthFailure:
            return SessionInfo(authenticated=False)
        return self._parse("/api/session", SessionInfo.from_dict, data)

    def logout(self) -> None:
        self._request("DELETE", "/api/session")

    # Clients

    def list_clients(self) -> list[Client]:
        data = self._json("GET", "/api/client")
        return self._parse(
            "/api/client",
            lambda items: [Client.from_dict(c) for c in items],
            data
        )

    def create_client(self, name: str) -> Client:
        data = self._json("POST", "/api/client", {"name": name})
        return self._parse("/api/client", Client.from_dict, data)

    def get_client(self, client_id: str) -> Client:
        path = f"/api/client/{client_id}"
        return self._parse(path, Client.from_dict, self._json("GET", path))

    def update_client(self, client_id: str, patch: ClientPatch) -> Client:
        path = f"/api/client/{client_id}"
        data = self._json("PUT", path, patch.to_payload())
        return self._parse(path, Client.from_dict, data)

    def delete_client(self, client_id: str) -> None:
        self._request("DELETE", f"/api/client/{client_id}")

    def enable_client(self, client_id: str) -> None:
        self._request("PUT", f"/api/client/{client_id}/enable")

    def disable_client(self, client_id: str) -> None:
        self._request("PUT", f"/api/client/{client_id}/disable")

    def qrcode_url(self, client_id: str) -> str:
        return self._url(f"/api/client/{client_id}/qrcode.svg")

    def configuration_url(self, client_id: str) -> str:
        return self._url(f"/api/client/{client_id}/configuration")

    def download_configuration(self, client_id: str) -> str:
        """Fetch client configuration text."""
        resp = self._request(
            "GET", f"/api/client/{client_id}/configuration"
        )
        return resp.text

    # Interface

    def get_interface(self) -> Interface:
        data = self._json("GET", "/api/interface")
        return self._parse("/api/interface", Interface.from_dict, data)

    def update_interface(self, patch: InterfacePatch) -> None:
        self._request("PUT", "/api/interface", patch.to_payload())

    # Stats

    def get_stats(self) -> list[PeerStats]:
        data = self._json("GET", "/api/stats")
        return self._parse(
            "/api/stats",
            lambda items: [PeerStats.from_dict(s) for s in items],
            data
        )

    # Config

    def get_config(self) -> PanelConfig:
        data = self._json("GET", "/api/config")
        return self._parse("/api/config", PanelConfig.from_dict, data)

    def update_config(self, patch: ConfigPatch) -> None:
        self._request("PUT", "/api/config", patch.to_payload())
