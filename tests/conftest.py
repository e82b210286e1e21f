"""Shared test fixtures for Tenant-Admin."""

import copy

import pytest
from httpx import ASGITransport, AsyncClient

from tenant_admin.common.exceptions import GatewayError
from tenant_admin.gateway.base import GatewayStatus, ReloadNotifier
from tenant_admin.store.memory import InMemoryConfigStore
from tenant_admin.tenants.service import TenantService


ADMIN_TOKEN = "test-admin-token"

BASE_CONFIG = {
    "gateway": {"port": 18789, "auth": {"mode": "token", "token": "gw-secret"}},
    "agents": {"defaults": {"model": "provider/model-x"}, "list": [{"id": "main"}]},
    "channels": {
        "slack": {
            "enabled": True,
            "botToken": "xoxb-test",
            "groupPolicy": "allowlist",
            "channels": {
                "acme-corp": {
                    "name": "Acme Corp",
                    "systemPrompt": "You are Acme's assistant.",
                    "tools": {"deny": ["exec", "write", "edit"]},
                    "users": ["U001", "U002"],
                    "enabled": True,
                    "paid": True,
                    "groupPolicy": "allowlist",
                },
                "bright-dental": {
                    "name": "Bright Dental",
                    "systemPrompt": "Dental assistant.",
                    "users": ["U100"],
                    "requireMention": True,
                },
            },
        },
        "discord": {"enabled": False, "channels": {"general": {"enabled": True}}},
    },
}


class RecordingNotifier(ReloadNotifier):
    """Counts restarts; fails them when ``fail`` is set."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[str] = []

    async def restart(self) -> None:
        self.calls.append("restart")
        if self.fail:
            raise GatewayError("gateway process not found")

    async def health(self) -> GatewayStatus:
        self.calls.append("health")
        if self.fail:
            raise GatewayError("gateway unreachable")
        return GatewayStatus(running=True, uptime=1000.0, version="test")

    @property
    def restarts(self) -> int:
        return self.calls.count("restart")


@pytest.fixture
def base_config():
    return copy.deepcopy(BASE_CONFIG)


@pytest.fixture
def store(base_config):
    return InMemoryConfigStore(base_config)


@pytest.fixture
def empty_store():
    return InMemoryConfigStore({"channels": {}})


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def svc(store, notifier):
    return TenantService(store, notifier)


@pytest.fixture
def admin_token():
    return ADMIN_TOKEN


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {ADMIN_TOKEN}"}


@pytest.fixture
def app(store, notifier, monkeypatch):
    """Create a test app wired to the in-memory store and recording notifier."""
    monkeypatch.setenv("TENANT_ADMIN_ADMIN_TOKEN", ADMIN_TOKEN)
    monkeypatch.setenv("TENANT_ADMIN_CHANNEL_TYPE", "slack")

    # Clear caches and singletons so new env vars take effect
    from tenant_admin.common.config import get_settings
    get_settings.cache_clear()

    from tenant_admin import deps
    deps.reset_singletons()
    deps.override(store=store, notifier=notifier)

    from tenant_admin.app import create_app
    yield create_app()

    deps.reset_singletons()
    get_settings.cache_clear()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def failing_notifier():
    return RecordingNotifier(fail=True)
