"""Tenant-Admin exception hierarchy."""


class TenantAdminError(Exception):
    """Base exception for all Tenant-Admin errors."""

    def __init__(self, message: str = "", code: str = "TENANT_ADMIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(TenantAdminError):
    """Raised when a tenant id or an input record is malformed."""

    def __init__(self, field: str, message: str = "Invalid value"):
        self.field = field
        super().__init__(message, code="VALIDATION")


class TenantNotFoundError(TenantAdminError):
    """Raised when the referenced tenant id is not in the directory."""

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"Tenant '{tenant_id}' not found", code="NOT_FOUND")


class TenantAlreadyExistsError(TenantAdminError):
    """Raised when adding a tenant whose id is already taken."""

    def __init__(self, tenant_id: str):
        self.tenant_id = tenant_id
        super().__init__(f"Tenant '{tenant_id}' already exists", code="ALREADY_EXISTS")


class ConfigReadError(TenantAdminError):
    """Raised when the config store cannot read or parse the document."""

    def __init__(self, message: str = "Could not read config", cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message, code="CONFIG_READ")


class ConfigWriteError(TenantAdminError):
    """Raised when the config store cannot persist the document."""

    def __init__(self, message: str = "Could not write config", cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message, code="CONFIG_WRITE")


class GatewayError(TenantAdminError):
    """Raised when the gateway cannot be restarted or reached."""

    def __init__(self, message: str = "Gateway unavailable", cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message, code="GATEWAY")
