"""Tenant-Admin: per-channel tenant configuration for a multi-tenant bot gateway."""

from tenant_admin.common.exceptions import (
    ConfigReadError,
    ConfigWriteError,
    GatewayError,
    TenantAdminError,
    TenantAlreadyExistsError,
    TenantNotFoundError,
    ValidationError,
)
from tenant_admin.common.merge import deep_merge
from tenant_admin.gateway.base import GatewayStatus, ReloadNotifier
from tenant_admin.store.base import ConfigStore
from tenant_admin.store.memory import InMemoryConfigStore
from tenant_admin.tenants.schemas import TenantConfig, TenantCreate, TenantUpdate, ToolPolicy
from tenant_admin.tenants.service import MutationResult, TenantService
from tenant_admin.tenants.validation import DEFAULT_TOOL_DENY, validate_tenant_id

__all__ = [
    "ConfigReadError",
    "ConfigStore",
    "ConfigWriteError",
    "DEFAULT_TOOL_DENY",
    "GatewayError",
    "GatewayStatus",
    "InMemoryConfigStore",
    "MutationResult",
    "ReloadNotifier",
    "TenantAdminError",
    "TenantAlreadyExistsError",
    "TenantConfig",
    "TenantCreate",
    "TenantNotFoundError",
    "TenantService",
    "TenantUpdate",
    "ToolPolicy",
    "ValidationError",
    "deep_merge",
    "validate_tenant_id",
]
__version__ = "0.1.0"
