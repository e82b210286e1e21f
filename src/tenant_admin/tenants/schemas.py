"""Pydantic schemas for tenant records."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from tenant_admin.tenants.validation import DEFAULT_TOOL_DENY

GroupPolicy = Literal["allowlist", "open"]


def _default_deny() -> list[str]:
    return list(DEFAULT_TOOL_DENY)


class ToolPolicy(BaseModel):
    """Capabilities a tenant's bot is forbidden to invoke.

    An absent or empty deny list resolves to ``DEFAULT_TOOL_DENY``.
    Other keys (e.g. ``allow``) are kept as given.
    """

    model_config = ConfigDict(extra="allow")

    deny: list[str] = Field(default_factory=_default_deny)

    @field_validator("deny", mode="before")
    @classmethod
    def _fill_empty_deny(cls, value: Any) -> Any:
        if value is None or (isinstance(value, (list, tuple)) and len(value) == 0):
            return _default_deny()
        return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TenantConfig(_CamelModel):
    """A tenant as returned to callers, every field defaulted."""

    id: str
    name: str
    channel_name: str
    system_prompt: str = ""
    tools: ToolPolicy = Field(default_factory=ToolPolicy)
    users: list[str] = Field(default_factory=list)
    enabled: bool = True
    paid: bool = False
    group_policy: GroupPolicy = "allowlist"


class TenantCreate(_CamelModel):
    """Fields supplied when adding a tenant; omitted ones take defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    name: Optional[str] = None
    system_prompt: Optional[str] = None
    tools: Optional[ToolPolicy] = None
    users: Optional[list[str]] = None
    enabled: Optional[bool] = None
    paid: Optional[bool] = None
    group_policy: Optional[GroupPolicy] = None


class TenantUpdate(TenantCreate):
    """Partial update; only fields that are set are merged onto the record."""


class TenantCreateRequest(TenantCreate):
    """HTTP body for creating a tenant."""

    id: str


class GatewayRestartStatus(BaseModel):
    success: bool
    error: Optional[str] = None


class TenantMutationResponse(_CamelModel):
    """Result of a mutating call; ``gatewayRestart.success`` is false when saved but not live."""

    tenant: Optional[TenantConfig] = None
    gateway_restart: GatewayRestartStatus


class GatewayHealthResponse(BaseModel):
    running: bool
    uptime: Optional[float] = None
    version: Optional[str] = None


class ChannelConfigResponse(_CamelModel):
    channel_type: str
    channel_config: dict[str, Any]
