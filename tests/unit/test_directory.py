"""Tests for tenant directory access — extract, embed, defaulting."""

from tenant_admin.tenants.directory import (
    channel_section,
    channel_to_tenant,
    embed_channels,
    extract_channels,
    merge_channel,
    tenant_to_channel,
)
from tenant_admin.tenants.schemas import TenantCreate, TenantUpdate
from tenant_admin.tenants.validation import DEFAULT_TOOL_DENY


class TestExtract:
    def test_missing_levels(self):
        assert extract_channels({}) == {}
        assert extract_channels({"channels": {}}) == {}
        assert extract_channels({"channels": {"slack": {}}}) == {}

    def test_non_mapping_levels(self):
        assert extract_channels({"channels": []}) == {}
        assert extract_channels({"channels": {"slack": {"channels": "oops"}}}) == {}

    def test_returns_entries(self, base_config):
        channels = extract_channels(base_config)
        assert list(channels) == ["acme-corp", "bright-dental"]
        assert channels["acme-corp"] is base_config["channels"]["slack"]["channels"]["acme-corp"]

    def test_does_not_mutate(self, base_config):
        channels = extract_channels(base_config)
        channels["new"] = {}
        assert "new" not in base_config["channels"]["slack"]["channels"]

    def test_channel_type(self, base_config):
        assert list(extract_channels(base_config, "discord")) == ["general"]

    def test_channel_section(self, base_config):
        assert channel_section(base_config)["botToken"] == "xoxb-test"
        assert channel_section({}, "teams") == {}


class TestEmbed:
    def test_returns_new_document(self, base_config):
        new = embed_channels(base_config, {"only": {}})
        assert new is not base_config
        assert list(base_config["channels"]["slack"]["channels"]) == ["acme-corp", "bright-dental"]
        assert list(new["channels"]["slack"]["channels"]) == ["only"]

    def test_shares_unrelated_keys(self, base_config):
        new = embed_channels(base_config, {})
        assert new["gateway"] is base_config["gateway"]
        assert new["agents"] is base_config["agents"]
        assert new["channels"]["discord"] is base_config["channels"]["discord"]
        assert new["channels"]["slack"]["botToken"] == "xoxb-test"

    def test_copies_ancestors(self, base_config):
        new = embed_channels(base_config, {})
        assert new["channels"] is not base_config["channels"]
        assert new["channels"]["slack"] is not base_config["channels"]["slack"]

    def test_creates_missing_path(self):
        new = embed_channels({"meta": 1}, {"a": {"enabled": True}}, "discord")
        assert new == {"meta": 1, "channels": {"discord": {"channels": {"a": {"enabled": True}}}}}

    def test_replaces_non_mapping_ancestor(self):
        new = embed_channels({"channels": None}, {"a": {}})
        assert new["channels"]["slack"]["channels"] == {"a": {}}

    def test_extract_after_embed(self, base_config):
        channels = {"x": {"paid": True}}
        assert extract_channels(embed_channels(base_config, channels)) == channels


class TestChannelToTenant:
    def test_defaults_from_empty_entry(self):
        tenant = channel_to_tenant("abc", {})
        assert tenant.name == "abc"
        assert tenant.channel_name == "#client-abc"
        assert tenant.system_prompt == ""
        assert tenant.tools.deny == list(DEFAULT_TOOL_DENY)
        assert tenant.users == []
        assert tenant.enabled is True
        assert tenant.paid is False
        assert tenant.group_policy == "allowlist"

    def test_non_mapping_entry(self):
        assert channel_to_tenant("abc", None).enabled is True

    def test_enabled_only_false_when_false(self):
        assert channel_to_tenant("a", {"enabled": False}).enabled is False
        assert channel_to_tenant("a", {"enabled": None}).enabled is True
        assert channel_to_tenant("a", {"enabled": 0}).enabled is True

    def test_paid_only_true_when_true(self):
        assert channel_to_tenant("a", {"paid": True}).paid is True
        assert channel_to_tenant("a", {"paid": "yes"}).paid is False

    def test_unknown_group_policy_reads_allowlist(self):
        assert channel_to_tenant("a", {"groupPolicy": "open"}).group_policy == "open"
        assert channel_to_tenant("a", {"groupPolicy": "everyone"}).group_policy == "allowlist"

    def test_malformed_tools_fall_back_to_default(self):
        assert channel_to_tenant("a", {"tools": "all"}).tools.deny == list(DEFAULT_TOOL_DENY)
        assert channel_to_tenant("a", {"tools": {"deny": "exec"}}).tools.deny == list(DEFAULT_TOOL_DENY)
        assert channel_to_tenant("a", {"tools": {"allow": ["x"]}}).tools.deny == list(DEFAULT_TOOL_DENY)

    def test_tool_extras_kept(self):
        tenant = channel_to_tenant("a", {"tools": {"deny": ["exec"], "allow": ["search"]}})
        assert tenant.tools.deny == ["exec"]
        assert tenant.tools.model_dump()["allow"] == ["search"]

    def test_camel_case_dump(self):
        data = channel_to_tenant("a", {"systemPrompt": "p"}).model_dump(by_alias=True)
        assert data["systemPrompt"] == "p"
        assert data["channelName"] == "#client-a"
        assert data["groupPolicy"] == "allowlist"


class TestTenantToChannel:
    def test_defaults(self):
        entry = tenant_to_channel(TenantCreate())
        assert entry == {
            "tools": {"deny": list(DEFAULT_TOOL_DENY)},
            "users": [],
            "enabled": True,
            "paid": False,
            "groupPolicy": "allowlist",
        }

    def test_supplied_fields(self):
        entry = tenant_to_channel(
            TenantCreate(name="N", system_prompt="P", users=["U1"], enabled=False, paid=True, group_policy="open")
        )
        assert entry["name"] == "N"
        assert entry["systemPrompt"] == "P"
        assert entry["users"] == ["U1"]
        assert entry["enabled"] is False
        assert entry["paid"] is True
        assert entry["groupPolicy"] == "open"

    def test_users_copied(self):
        users = ["U1"]
        entry = tenant_to_channel(TenantCreate(users=users))
        users.append("U2")
        assert entry["users"] == ["U1"]


class TestMergeChannel:
    def test_only_set_fields(self):
        existing = {"name": "A", "users": ["U1"], "custom": 1}
        merged = merge_channel(existing, TenantUpdate(system_prompt="new"))
        assert merged == {"name": "A", "users": ["U1"], "custom": 1, "systemPrompt": "new"}
        assert existing == {"name": "A", "users": ["U1"], "custom": 1}

    def test_explicit_false_is_applied(self):
        merged = merge_channel({"enabled": True, "paid": True}, TenantUpdate(enabled=False, paid=False))
        assert merged == {"enabled": False, "paid": False}
