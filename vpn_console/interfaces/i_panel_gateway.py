"""Panel gateway interface and data records (adapter pattern)."""

from dataclasses import dataclass, fields
from typing import Optional, Protocol


def _known(cls, data: dict) -> dict:
    """Keep only keys the record declares (server may add fields)."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in data.items() if k in names}


@dataclass
class SessionInfo:
    """Answer of the session endpoint."""
    authenticated: bool
    username: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "SessionInfo":
        return cls(
            authenticated=bool(data.get("authenticated", False)),
            username=data.get("username")
        )


@dataclass
class Client:
    """WireGuard peer record."""
    id: str
    name: str
    public_key: str
    preshared_key: str
    ipv4: str
    enabled: int
    created_at: str
    ipv6: Optional[str] = None
    expires_at: Optional[str] = None
    download_url: Optional[str] = None
    one_time_link: Optional[str] = None

    @property
    def is_enabled(self) -> bool:
        return bool(self.enabled)

    @classmethod
    def from_dict(cls, data: dict) -> "Client":
        return cls(**_known(cls, data))


@dataclass
class Interface:
    """Server-side WireGuard interface."""
    id: str
    name: str
    public_key: str
    listen_port: int
    ipv4_cidr: str
    ipv6_cidr: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Interface":
        return cls(**_known(cls, data))


@dataclass
class PeerStats:
    """Traffic counters of one peer, keyed by public key."""
    public_key: str
    rx_bytes: int
    tx_bytes: int
    last_handshake_secs: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "PeerStats":
        return cls(**_known(cls, data))


@dataclass
class PanelConfig:
    """Server-wide defaults for new clients."""
    wg_host: str
    wg_port: int
    wg_default_dns: str
    wg_allowed_ips: str
    wg_default_address: str

    @classmethod
    def from_dict(cls, data: dict) -> "PanelConfig":
        return cls(**_known(cls, data))


class _Patch:
    """Partial update: None means absent, anything else is sent."""

    def to_payload(self) -> dict:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }

    def is_empty(self) -> bool:
        return not self.to_payload()


@dataclass
class ClientPatch(_Patch):
    name: Optional[str] = None
    enabled: Optional[bool] = None
    expires_at: Optional[str] = None


@dataclass
class InterfacePatch(_Patch):
    listen_port: Optional[int] = None
    ipv4_cidr: Optional[str] = None


@dataclass
class ConfigPatch(_Patch):
    wg_host: Optional[str] = None
    wg_port: Optional[int] = None
    wg_default_dns: Optional[str] = None
    wg_allowed_ips: Optional[str] = None
    wg_default_address: Optional[str] = None


class IPanelGateway(Protocol):
    """Interface for the panel REST API."""

    def check_session(self) -> SessionInfo:
        ...

    def login(
        self, username: str, password: str, totp_code: Optional[str] = None
    ) -> SessionInfo:
        ...

    def logout(self) -> None:
        ...

    def list_clients(self) -> list[Client]:
        ...

    def create_client(self, name: str) -> Client:
        ...

    def get_client(self, client_id: str) -> Client:
        ...

    def update_client(self, client_id: str, patch: ClientPatch) -> Client:
        ...

    def delete_client(self, client_id: str) -> None:
        ...

    def enable_client(self, client_id: str) -> None:
        ...

    def disable_client(self, client_id: str) -> None:
        ...

    def qrcode_url(self, client_id: str) -> str:
        ...

    def configuration_url(self, client_id: str) -> str:
        ...

    def download_configuration(self, client_id: str) -> str:
        ...

    def get_interface(self) -> Interface:
        ...

    def update_interface(self, patch: InterfacePatch) -> None:
        ...

    def get_stats(self) -> list[PeerStats]:
        ...

    def get_config(self) -> PanelConfig:
        ...

    def update_config(self, patch: ConfigPatch) -> None:
        ...
