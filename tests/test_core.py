"""Unit tests for session, registry, cache and settings."""

import asyncio
import pytest
from unittest.mock import Mock
from vpn_console.core import (
    ClientRegistry,
    QueryCache,
    SessionManager,
    SessionState,
    SettingsStore,
)
from vpn_console.errors import NotFound, TransportFailure, ValidationFailure
from vpn_console.interfaces import (
    ClientPatch,
    ConfigPatch,
    Interface,
    InterfacePatch,
    SessionInfo,
)
from helpers import make_client


# Session


@pytest.mark.asyncio
async def test_session_starts_unknown_then_follows_server():
    gateway = Mock()
    gateway.check_session.return_value = SessionInfo(True, "admin")
    session = SessionManager(gateway, Mock())

    assert session.state is SessionState.UNKNOWN
    await session.initialize()

    assert session.state is SessionState.AUTHENTICATED
    assert session.username == "admin"


@pytest.mark.asyncio
async def test_session_check_failure_is_unauthenticated():
    """Startup check never raises."""
    gateway = Mock()
    gateway.check_session.side_effect = TransportFailure("down")
    session = SessionManager(gateway, Mock())

    state = await session.initialize()

    assert state is SessionState.UNAUTHENTICATED


@pytest.mark.asyncio
async def test_login_without_totp_sets_username():
    gateway = Mock()
    gateway.login.return_value = SessionInfo(authenticated=True)
    session = SessionManager(gateway, Mock())

    assert await session.login("admin", "secret") is True

    gateway.login.assert_called_once_with("admin", "secret", None)
    assert session.authenticated
    assert session.username == "admin"


@pytest.mark.asyncio
async def test_login_wrong_password_stays_unauthenticated():
    gateway = Mock()
    gateway.login.return_value = SessionInfo(authenticated=False)
    session = SessionManager(gateway, Mock())

    assert await session.login("admin", "wrong") is False

    assert session.state is SessionState.UNAUTHENTICATED
    assert session.username is None


@pytest.mark.asyncio
async def test_login_transport_failure_is_plain_false():
    gateway = Mock()
    gateway.login.side_effect = TransportFailure("timeout")
    session = SessionManager(gateway, Mock())

    assert await session.login("admin", "secret", "123456") is False
    assert session.state is SessionState.UNAUTHENTICATED


@pytest.mark.asyncio
async def test_login_totp_blank_omitted_and_long_truncated():
    gateway = Mock()
    gateway.login.return_value = SessionInfo(True, "admin")
    session = SessionManager(gateway, Mock())

    await session.login("admin", "secret", "   ")
    assert gateway.login.call_args[0][2] is None

    await session.login("admin", "secret", "1234567")
    assert gateway.login.call_args[0][2] == "123456"


@pytest.mark.asyncio
async def test_logout_clears_state_even_when_server_fails():
    gateway = Mock()
    gateway.login.return_value = SessionInfo(True, "admin")
    gateway.logout.side_effect = TransportFailure("connection reset")
    session = SessionManager(gateway, Mock())
    await session.login("admin", "secret")

    await session.logout()

    assert session.state is SessionState.UNAUTHENTICATED
    assert session.username is None


@pytest.mark.asyncio
async def test_ensure_logs_in_with_configured_credentials():
    gateway = Mock()
    gateway.check_session.return_value = SessionInfo(False)
    gateway.login.return_value = SessionInfo(True, "admin")
    session = SessionManager(gateway, Mock())

    assert await session.ensure("admin", "secret") is True
    gateway.login.assert_called_once()


@pytest.mark.asyncio
async def test_ensure_without_credentials_only_checks():
    gateway = Mock()
    gateway.check_session.return_value = SessionInfo(False)
    session = SessionManager(gateway, Mock())

    assert await session.ensure() is False
    gateway.login.assert_not_called()


# Cache


@pytest.mark.asyncio
async def test_cache_collapses_concurrent_fetches():
    cache = QueryCache()
    calls = []

    async def loader():
        calls.append(1)
        await asyncio.sleep(0.01)
        return ["value"]

    first, second = await asyncio.gather(
        cache.fetch("k", loader), cache.fetch("k", loader)
    )

    assert first == second == ["value"]
    assert len(calls) == 1
    assert await cache.fetch("k", loader) == ["value"]
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_cache_invalidation_during_fetch_forces_refetch():
    """A fetch that began before invalidation does not mark the key fresh."""
    cache = QueryCache()
    release = asyncio.Event()
    results = iter(["old", "new"])

    async def loader():
        value = next(results)
        if value == "old":
            await release.wait()
        return value

    pending = asyncio.ensure_future(cache.fetch("k", loader))
    await asyncio.sleep(0)
    cache.invalidate("k")
    release.set()

    assert await pending == "old"
    assert len(cache) == 0
    assert await cache.fetch("k", loader) == "new"


@pytest.mark.asyncio
async def test_cache_failed_fetch_is_retried_next_read():
    cache = QueryCache()
    attempts = []

    async def loader():
        attempts.append(1)
        if len(attempts) == 1:
            raise TransportFailure("down")
        return "ok"

    with pytest.raises(TransportFailure):
        await cache.fetch("k", loader)

    assert await cache.fetch("k", loader) == "ok"


@pytest.mark.asyncio
async def test_cache_stale_after_bounds_age():
    now = [100.0]
    cache = QueryCache(clock=lambda: now[0])
    values = iter(["first", "second", "third"])

    async def loader():
        return next(values)

    assert await cache.fetch("k", loader, stale_after=30) == "first"
    now[0] += 29
    assert await cache.fetch("k", loader, stale_after=30) == "first"
    now[0] += 1
    assert await cache.fetch("k", loader, stale_after=30) == "second"
    assert await cache.fetch("k", loader, stale_after=0) == "third"


@pytest.mark.asyncio
async def test_cache_zero_stale_after_still_shares_one_fetch():
    cache = QueryCache()
    calls = []

    async def loader():
        calls.append(1)
        await asyncio.sleep(0.01)
        return len(calls)

    results = await asyncio.gather(
        *[cache.fetch("k", loader, stale_after=0) for _ in range(3)]
    )

    assert results == [1, 1, 1]
    assert len(calls) == 1


def test_cache_invalidating_unread_keys_stores_nothing():
    cache = QueryCache()

    for idx in range(100):
        cache.invalidate("clients", ("client", f"gone-{idx}"))

    assert len(cache) == 0


@pytest.mark.asyncio
async def test_cache_invalidate_drops_entry():
    cache = QueryCache()

    async def loader():
        return "value"

    await cache.fetch(("client", "c1"), loader)
    assert len(cache) == 1

    cache.invalidate(("client", "c1"))
    assert len(cache) == 0


# Registry


@pytest.mark.asyncio
async def test_registry_list_is_cached():
    gateway = Mock()
    gateway.list_clients.return_value = [make_client()]
    registry = ClientRegistry(gateway, QueryCache(), Mock())

    await registry.list()
    await registry.list()

    gateway.list_clients.assert_called_once()


@pytest.mark.asyncio
async def test_registry_list_stale_after_zero_sees_server_change():
    gateway = Mock()
    gateway.list_clients.return_value = [make_client(name="laptop")]
    registry = ClientRegistry(gateway, QueryCache(), Mock())
    await registry.list(stale_after=0)

    # changed by someone else, no local mutation
    gateway.list_clients.return_value = [make_client(name="desktop")]
    clients = await registry.list(stale_after=0)

    assert clients[0].name == "desktop"
    assert gateway.list_clients.call_count == 2


@pytest.mark.asyncio
async def test_registry_create_blank_name_issues_no_request():
    gateway = Mock()
    registry = ClientRegistry(gateway, QueryCache(), Mock())

    with pytest.raises(ValidationFailure):
        await registry.create("  ")

    assert gateway.method_calls == []


@pytest.mark.asyncio
async def test_registry_create_trims_and_invalidates():
    gateway = Mock()
    gateway.list_clients.return_value = []
    gateway.create_client.return_value = make_client(name="phone")
    registry = ClientRegistry(gateway, QueryCache(), Mock())
    await registry.list()

    await registry.create("  phone ")

    gateway.create_client.assert_called_once_with("phone")
    await registry.list()
    assert gateway.list_clients.call_count == 2


@pytest.mark.asyncio
async def test_registry_enable_then_list_is_not_stale():
    gateway = Mock()
    server = {"enabled": 0}
    gateway.list_clients.side_effect = lambda: [
        make_client(enabled=server["enabled"])
    ]

    def enable(client_id):
        server["enabled"] = 1

    gateway.enable_client.side_effect = enable
    registry = ClientRegistry(gateway, QueryCache(), Mock())

    before = await registry.list()
    await registry.enable("c1")
    after = await registry.list()

    assert before[0].is_enabled is False
    assert after[0].is_enabled is True


@pytest.mark.asyncio
async def test_registry_failed_mutation_keeps_cache():
    gateway = Mock()
    gateway.list_clients.return_value = [make_client()]
    gateway.delete_client.side_effect = NotFound("missing", status=404)
    registry = ClientRegistry(gateway, QueryCache(), Mock())
    await registry.list()

    with pytest.raises(NotFound):
        await registry.remove("missing")

    await registry.list()
    gateway.list_clients.assert_called_once()


@pytest.mark.asyncio
async def test_registry_update_never_merges_response():
    """Mutation responses are ignored by the cache."""
    gateway = Mock()
    gateway.list_clients.return_value = [make_client(name="old")]
    gateway.update_client.return_value = make_client(name="from-response")
    registry = ClientRegistry(gateway, QueryCache(), Mock())
    await registry.list()

    gateway.list_clients.return_value = [make_client(name="from-server")]
    await registry.update("c1", ClientPatch(name="new"))

    clients = await registry.list()
    assert clients[0].name == "from-server"


@pytest.mark.asyncio
async def test_registry_disable_invalidates_single_client():
    gateway = Mock()
    gateway.get_client.return_value = make_client()
    registry = ClientRegistry(gateway, QueryCache(), Mock())
    await registry.get("c1")

    await registry.disable("c1")
    await registry.get("c1")

    assert gateway.get_client.call_count == 2


@pytest.mark.asyncio
async def test_registry_rename_and_expiry_validate_input():
    gateway = Mock()
    registry = ClientRegistry(gateway, QueryCache(), Mock())

    with pytest.raises(ValidationFailure):
        await registry.rename("c1", " ")
    with pytest.raises(ValidationFailure):
        await registry.set_expiry("c1", "")

    gateway.update_client.assert_not_called()


@pytest.mark.asyncio
async def test_registry_set_expiry_sends_patch():
    gateway = Mock()
    gateway.update_client.return_value = make_client()
    registry = ClientRegistry(gateway, QueryCache(), Mock())

    await registry.set_expiry("c1", "2025-01-01")

    gateway.update_client.assert_called_once_with(
        "c1", ClientPatch(expires_at="2025-01-01")
    )


# Settings


@pytest.mark.asyncio
async def test_settings_update_interface_refetches():
    gateway = Mock()
    gateway.get_interface.return_value = Interface(
        id="i1", name="wg0", public_key="pub", listen_port=51820,
        ipv4_cidr="10.8.0.0/24"
    )
    store = SettingsStore(gateway, QueryCache(), Mock())
    await store.interface()

    assert await store.update_interface(InterfacePatch(listen_port=51821))
    await store.interface()

    gateway.update_interface.assert_called_once_with(
        InterfacePatch(listen_port=51821)
    )
    assert gateway.get_interface.call_count == 2


@pytest.mark.asyncio
async def test_settings_empty_patch_is_not_sent():
    gateway = Mock()
    store = SettingsStore(gateway, QueryCache(), Mock())

    assert await store.update_config(ConfigPatch()) is False
    gateway.update_config.assert_not_called()


@pytest.mark.asyncio
async def test_settings_server_rejection_surfaces():
    """Malformed values are left to the server."""
    gateway = Mock()
    gateway.update_interface.side_effect = TransportFailure(
        "PUT /api/interface -> 400", status=400
    )
    store = SettingsStore(gateway, QueryCache(), Mock())

    with pytest.raises(TransportFailure):
        await store.update_interface(InterfacePatch(ipv4_cidr="not-a-cidr"))
