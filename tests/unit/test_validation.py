"""Tests for tenant id validation."""

import pytest

from tenant_admin.common.exceptions import TenantAdminError, ValidationError
from tenant_admin.tenants.schemas import ToolPolicy
from tenant_admin.tenants.validation import DEFAULT_TOOL_DENY, validate_tenant_id


class TestValidateTenantId:
    def test_trims(self):
        assert validate_tenant_id("  acme ") == "acme"

    def test_plain_ids(self):
        for tenant_id in ("acme", "client-acme", "acme_corp", "a.b", "C0123ABC", "#client-x"):
            assert validate_tenant_id(tenant_id) == tenant_id

    @pytest.mark.parametrize("bad", ["", " ", "\t\n"])
    def test_empty(self, bad):
        with pytest.raises(ValidationError, match="empty"):
            validate_tenant_id(bad)

    @pytest.mark.parametrize(
        "bad", ["..", "../etc", "a/../b", "a//b", "a\\\\b", "a/.b", "a\\.b", "..\\windows"]
    )
    def test_path_traversal(self, bad):
        with pytest.raises(ValidationError, match="traversal"):
            validate_tenant_id(bad)

    def test_single_separator_allowed(self):
        assert validate_tenant_id("team/alpha") == "team/alpha"

    def test_length_limit(self):
        assert validate_tenant_id("x" * 255) == "x" * 255
        with pytest.raises(ValidationError, match="too long"):
            validate_tenant_id("x" * 256)

    def test_non_string(self):
        with pytest.raises(ValidationError):
            validate_tenant_id(None)

    def test_error_shape(self):
        with pytest.raises(ValidationError) as exc:
            validate_tenant_id("")
        assert exc.value.field == "id"
        assert exc.value.code == "VALIDATION"
        assert isinstance(exc.value, TenantAdminError)


class TestToolPolicy:
    def test_default(self):
        assert ToolPolicy().deny == list(DEFAULT_TOOL_DENY)

    def test_empty_and_none_fill_default(self):
        assert ToolPolicy(deny=[]).deny == list(DEFAULT_TOOL_DENY)
        assert ToolPolicy(deny=None).deny == list(DEFAULT_TOOL_DENY)

    def test_explicit_list_kept(self):
        assert ToolPolicy(deny=["exec"]).deny == ["exec"]

    def test_default_not_shared(self):
        a = ToolPolicy()
        a.deny.append("browser")
        assert ToolPolicy().deny == list(DEFAULT_TOOL_DENY)
