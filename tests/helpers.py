"""Shared record builders for tests."""

from vpn_console.interfaces import Client


def make_client(client_id="c1", public_key="A", enabled=1, name="laptop"):
    return Client(
        id=client_id,
        name=name,
        public_key=public_key,
        preshared_key="psk",
        ipv4="10.8.0.2",
        enabled=enabled,
        created_at="2024-01-01T00:00:00Z"
    )
