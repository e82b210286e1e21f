"""Dependency injection singletons for Tenant-Admin."""

from tenant_admin.common.config import TenantAdminSettings, get_settings
from tenant_admin.gateway.base import NullReloadNotifier, ReloadNotifier
from tenant_admin.gateway.command import CommandReloadNotifier
from tenant_admin.gateway.remote import HttpReloadNotifier
from tenant_admin.store.base import ConfigStore
from tenant_admin.store.json_file import JsonFileConfigStore
from tenant_admin.tenants.service import TenantService

_store: ConfigStore | None = None
_notifier: ReloadNotifier | None = None
_tenants: TenantService | None = None


def build_notifier(settings: TenantAdminSettings) -> ReloadNotifier:
    if settings.notifier == "http":
        return HttpReloadNotifier(
            settings.gateway_url,
            token=settings.gateway_token,
            timeout=settings.gateway_timeout,
        )
    if settings.notifier == "none":
        return NullReloadNotifier()
    return CommandReloadNotifier(
        restart_command=settings.gateway_restart_command,
        status_command=settings.gateway_status_command,
        timeout=settings.gateway_timeout,
    )


def get_config_store() -> ConfigStore:
    global _store
    if _store is None:
        _store = JsonFileConfigStore(get_settings().config_path)
    return _store


def get_reload_notifier() -> ReloadNotifier:
    global _notifier
    if _notifier is None:
        _notifier = build_notifier(get_settings())
    return _notifier


def get_tenant_service() -> TenantService:
    global _tenants
    if _tenants is None:
        _tenants = TenantService(
            get_config_store(),
            get_reload_notifier(),
            channel_type=get_settings().channel_type,
        )
    return _tenants


def override(store: ConfigStore | None = None, notifier: ReloadNotifier | None = None) -> None:
    """Swap in a store and/or notifier (for testing and embedding)."""
    global _store, _notifier, _tenants
    if store is not None:
        _store = store
    if notifier is not None:
        _notifier = notifier
    _tenants = None


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _store, _notifier, _tenants
    _store = None
    _notifier = None
    _tenants = None
