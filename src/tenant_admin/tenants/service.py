"""Tenant CRUD service."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

import pydantic

from tenant_admin.common.exceptions import (
    GatewayError,
    TenantAlreadyExistsError,
    TenantNotFoundError,
    ValidationError,
)
from tenant_admin.common.merge import deep_merge
from tenant_admin.gateway.base import GatewayStatus, ReloadNotifier
from tenant_admin.store.base import ConfigStore
from tenant_admin.tenants.directory import (
    channel_section,
    channel_to_tenant,
    embed_channels,
    extract_channels,
    merge_channel,
    tenant_to_channel,
)
from tenant_admin.tenants.schemas import TenantConfig, TenantCreate, TenantUpdate
from tenant_admin.tenants.validation import validate_tenant_id

logger = logging.getLogger(__name__)

TenantInput = Union[TenantCreate, Mapping[str, Any], None]


@dataclass
class MutationResult:
    """Outcome of a mutating call.

    The document was persisted. ``gateway_error`` is set when the reload
    that follows the write failed, i.e. the change is saved but not live.
    """

    tenant: Optional[TenantConfig] = None
    gateway_error: Optional[GatewayError] = None

    @property
    def live(self) -> bool:
        return self.gateway_error is None


def _parse(model: type[TenantCreate], data: TenantInput) -> TenantCreate:
    if data is None:
        return model()
    if isinstance(data, model):
        return data
    if isinstance(data, TenantCreate):
        return model.model_validate(data.model_dump(exclude_unset=True))
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise ValidationError(field, first["msg"]) from e


class TenantService:
    """Tenant management over the shared gateway config document.

    Every mutation reads the whole document, rewrites only the tenant
    sub-map, writes the whole document back, then restarts the gateway.
    Mutations on one service instance run one at a time.
    """

    def __init__(
        self,
        config_store: ConfigStore,
        notifier: ReloadNotifier,
        channel_type: str = "slack",
    ):
        self.config_store = config_store
        self.notifier = notifier
        self.channel_type = channel_type
        self._write_lock = asyncio.Lock()

    async def _commit(self, document: dict[str, Any]) -> Optional[GatewayError]:
        """Persist the document and restart the gateway.

        A write failure propagates and skips the restart. A restart failure
        is returned, not raised, since the write already happened.
        """
        await self.config_store.write(document)
        try:
            await self.notifier.restart()
        except GatewayError as e:
            logger.warning("Config saved but gateway restart failed: %s", e.message)
            return e
        return None

    # ── Reads ──

    async def list_tenants(self) -> list[TenantConfig]:
        document = await self.config_store.read()
        channels = extract_channels(document, self.channel_type)
        return [channel_to_tenant(tenant_id, entry) for tenant_id, entry in channels.items()]

    async def get_tenant(self, tenant_id: str) -> TenantConfig:
        valid_id = validate_tenant_id(tenant_id)
        document = await self.config_store.read()
        channels = extract_channels(document, self.channel_type)
        if valid_id not in channels:
            raise TenantNotFoundError(valid_id)
        return channel_to_tenant(valid_id, channels[valid_id])

    async def channel_config(self) -> dict[str, Any]:
        """Raw ``channels.<channel_type>`` section, for debugging."""
        document = await self.config_store.read()
        return channel_section(document, self.channel_type)

    async def gateway_health(self) -> GatewayStatus:
        return await self.notifier.health()

    # ── Mutations ──

    async def add_tenant(self, tenant_id: str, data: TenantInput = None) -> MutationResult:
        """Create a tenant from defaults plus the supplied fields."""
        valid_id = validate_tenant_id(tenant_id)
        fields = _parse(TenantCreate, data)
        async with self._write_lock:
            document = await self.config_store.read()
            channels = extract_channels(document, self.channel_type)
            if valid_id in channels:
                raise TenantAlreadyExistsError(valid_id)

            entry = tenant_to_channel(fields)
            updated = embed_channels(document, {**channels, valid_id: entry}, self.channel_type)
            gateway_error = await self._commit(updated)

        logger.info("Added tenant %s", valid_id, extra={"tenant_id": valid_id})
        return MutationResult(channel_to_tenant(valid_id, entry), gateway_error)

    async def update_tenant(self, tenant_id: str, data: TenantInput) -> MutationResult:
        """Merge the set fields of ``data`` onto an existing tenant.

        Fields left out of ``data`` keep their stored values.
        """
        valid_id = validate_tenant_id(tenant_id)
        changes = _parse(TenantUpdate, data)
        async with self._write_lock:
            document = await self.config_store.read()
            channels = extract_channels(document, self.channel_type)
            if valid_id not in channels:
                raise TenantNotFoundError(valid_id)

            merged = merge_channel(channels[valid_id], changes)
            updated = embed_channels(document, {**channels, valid_id: merged}, self.channel_type)
            gateway_error = await self._commit(updated)

        logger.info("Updated tenant %s", valid_id, extra={"tenant_id": valid_id})
        return MutationResult(channel_to_tenant(valid_id, merged), gateway_error)

    async def remove_tenant(self, tenant_id: str) -> MutationResult:
        """Delete the tenant's entry; returns the record as it was."""
        valid_id = validate_tenant_id(tenant_id)
        async with self._write_lock:
            document = await self.config_store.read()
            channels = extract_channels(document, self.channel_type)
            if valid_id not in channels:
                raise TenantNotFoundError(valid_id)

            removed = channels.pop(valid_id)
            updated = embed_channels(document, channels, self.channel_type)
            gateway_error = await self._commit(updated)

        logger.info("Removed tenant %s", valid_id, extra={"tenant_id": valid_id})
        return MutationResult(channel_to_tenant(valid_id, removed), gateway_error)

    async def pause_tenant(self, tenant_id: str) -> MutationResult:
        return await self.update_tenant(tenant_id, TenantUpdate(enabled=False))

    async def activate_tenant(self, tenant_id: str) -> MutationResult:
        return await self.update_tenant(tenant_id, TenantUpdate(enabled=True))

    async def patch_config(self, partial: Mapping[str, Any]) -> MutationResult:
        """Deep-merge a raw partial document, then persist and restart.

        Tenant ids introduced by the patch must pass the same validation
        as ``add_tenant``.
        """
        if not isinstance(partial, Mapping):
            raise ValidationError("body", "Config patch must be an object")
        for key in extract_channels(partial, self.channel_type):
            if validate_tenant_id(key) != key:
                raise ValidationError("id", f"Tenant ID '{key}' has surrounding whitespace")

        async with self._write_lock:
            document = await self.config_store.read()
            updated = deep_merge(document, partial)
            gateway_error = await self._commit(updated)

        logger.info("Patched config keys: %s", ", ".join(sorted(map(str, partial))))
        return MutationResult(None, gateway_error)
