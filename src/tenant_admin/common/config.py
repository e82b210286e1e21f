"""Tenant-Admin configuration via pydantic-settings."""

import warnings
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

_INSECURE_DEFAULTS = {
    "admin_token": "changeme",
}


class TenantAdminSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="TENANT_ADMIN_")

    environment: str = "development"

    # Shared gateway config document
    config_path: str = "~/.openclaw/openclaw.json"
    # Tenants live at channels.<channel_type>.channels
    channel_type: str = "slack"

    # API
    api_title: str = "Tenant-Admin"
    api_version: str = "0.1.0"
    admin_token: str = "changeme"
    host: str = "0.0.0.0"
    port: int = 3002
    log_level: str = "INFO"

    # Reload notifier
    notifier: Literal["command", "http", "none"] = "command"
    gateway_restart_command: str = "openclaw gateway restart"
    gateway_status_command: str = "openclaw gateway status --json"
    gateway_url: str = "http://localhost:18789"
    gateway_token: str = ""
    gateway_timeout: float = 10.0  # seconds

    def validate_for_production(self) -> None:
        """Raise if insecure defaults are used in non-development environments."""
        insecure_fields = [
            field
            for field, default in _INSECURE_DEFAULTS.items()
            if getattr(self, field) == default
        ]

        if self.environment != "development" and insecure_fields:
            env_vars = ", ".join(f"TENANT_ADMIN_{f.upper()}" for f in insecure_fields)
            raise RuntimeError(
                f"Insecure default values detected in '{self.environment}' environment. "
                f"Set these environment variables to secure values: {env_vars}. "
                "Generate secrets with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
            )

        if insecure_fields:
            warnings.warn(
                "Using insecure default admin token, set TENANT_ADMIN_ADMIN_TOKEN for production",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> TenantAdminSettings:
    settings = TenantAdminSettings()
    settings.validate_for_production()
    return settings
