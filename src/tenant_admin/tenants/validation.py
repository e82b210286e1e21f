"""Tenant id validation and the safe tool-deny default."""

import re

from tenant_admin.common.exceptions import ValidationError

# Tools a tenant's bot may never call unless an operator says otherwise
DEFAULT_TOOL_DENY: tuple[str, ...] = ("exec", "write", "edit", "gateway", "cron", "message")

MAX_TENANT_ID_LENGTH = 255

_PATH_TRAVERSAL = re.compile(r"[/\\.]{2,}|\.\.")


def validate_tenant_id(tenant_id: str) -> str:
    """Check a tenant id and return it trimmed.

    Ids end up in channel names and, elsewhere, in file paths, so
    runs of separators are refused outright.
    """
    if not isinstance(tenant_id, str) or not tenant_id.strip():
        raise ValidationError("id", "Tenant ID cannot be empty")
    if _PATH_TRAVERSAL.search(tenant_id):
        raise ValidationError("id", "Tenant ID contains path traversal characters")
    if len(tenant_id) > MAX_TENANT_ID_LENGTH:
        raise ValidationError("id", f"Tenant ID too long (max {MAX_TENANT_ID_LENGTH})")
    return tenant_id.strip()
