"""Access to the tenant sub-map of the shared gateway config document.

Tenants live at ``channels.<channel_type>.channels`` as a mapping from tenant
id to a channel entry. This module is the only place that knows that path;
everything else in the document is passed through untouched.
"""

from collections.abc import Mapping
from typing import Any

from tenant_admin.tenants.schemas import TenantConfig, TenantCreate, ToolPolicy

CHANNEL_NAME_PREFIX = "#client-"


def tenants_path(channel_type: str) -> tuple[str, ...]:
    return ("channels", channel_type, "channels")


def _walk(document: Mapping[str, Any], path: tuple[str, ...]) -> Mapping[str, Any]:
    node: Any = document
    for key in path:
        if not isinstance(node, Mapping):
            return {}
        node = node.get(key)
    return node if isinstance(node, Mapping) else {}


def extract_channels(document: Mapping[str, Any], channel_type: str = "slack") -> dict[str, Any]:
    """Return the tenant sub-map, or an empty dict if any level is missing.

    The returned dict is new; its values are the document's own entries.
    """
    return dict(_walk(document, tenants_path(channel_type)))


def channel_section(document: Mapping[str, Any], channel_type: str = "slack") -> dict[str, Any]:
    """Return the whole ``channels.<channel_type>`` section."""
    return dict(_walk(document, ("channels", channel_type)))


def _embed(node: Any, path: tuple[str, ...], value: Any) -> Any:
    if not path:
        return value
    copy = dict(node) if isinstance(node, Mapping) else {}
    copy[path[0]] = _embed(copy.get(path[0]), path[1:], value)
    return copy


def embed_channels(
    document: Mapping[str, Any],
    channels: Mapping[str, Any],
    channel_type: str = "slack",
) -> dict[str, Any]:
    """Return a new document whose tenant sub-map is ``channels``.

    Ancestors on the path are shallow-copied (or created); every other key
    at every level is carried over as the same object.
    """
    return _embed(document, tenants_path(channel_type), dict(channels))


def _tool_policy(raw: Any) -> ToolPolicy:
    if not isinstance(raw, Mapping):
        return ToolPolicy()
    deny = raw.get("deny")
    if not isinstance(deny, list) or not all(isinstance(tool, str) for tool in deny):
        deny = None
    return ToolPolicy(**{**raw, "deny": deny})


def channel_to_tenant(tenant_id: str, entry: Any) -> TenantConfig:
    """Materialize a stored channel entry as a fully defaulted tenant."""
    if not isinstance(entry, Mapping):
        entry = {}
    name = entry.get("name")
    prompt = entry.get("systemPrompt")
    users = entry.get("users")
    return TenantConfig(
        id=tenant_id,
        name=name if isinstance(name, str) else tenant_id,
        channel_name=f"{CHANNEL_NAME_PREFIX}{tenant_id}",
        system_prompt=prompt if isinstance(prompt, str) else "",
        tools=_tool_policy(entry.get("tools")),
        users=[str(user) for user in users] if isinstance(users, list) else [],
        enabled=entry.get("enabled") is not False,
        paid=entry.get("paid") is True,
        group_policy="open" if entry.get("groupPolicy") == "open" else "allowlist",
    )


def tenant_to_channel(data: TenantCreate) -> dict[str, Any]:
    """Build a new stored channel entry from supplied fields plus defaults."""
    entry: dict[str, Any] = {}
    if data.name is not None:
        entry["name"] = data.name
    if data.system_prompt is not None:
        entry["systemPrompt"] = data.system_prompt
    entry["tools"] = (data.tools or ToolPolicy()).model_dump()
    entry["users"] = list(data.users or [])
    entry["enabled"] = True if data.enabled is None else data.enabled
    entry["paid"] = bool(data.paid)
    entry["groupPolicy"] = data.group_policy or "allowlist"
    return entry


def merge_channel(existing: Any, changes: TenantCreate) -> dict[str, Any]:
    """Overlay only the fields set on ``changes`` onto a stored entry.

    Fields that were not set keep their stored value, as do keys this
    model does not know about.
    """
    base = dict(existing) if isinstance(existing, Mapping) else {}
    updates = changes.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)
    if "tools" in updates:
        # a replaced tool policy always carries its (possibly defaulted) deny list
        updates["tools"] = changes.tools.model_dump()
    return {**base, **updates}
