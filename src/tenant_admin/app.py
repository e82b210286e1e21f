"""FastAPI application factory for Tenant-Admin."""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tenant_admin.common.config import get_settings
from tenant_admin.common.exceptions import (
    ConfigReadError,
    ConfigWriteError,
    GatewayError,
    TenantAdminError,
    TenantAlreadyExistsError,
    TenantNotFoundError,
    ValidationError,
)
from tenant_admin.common.logging import setup_logging
from tenant_admin.common.schemas import ErrorResponse, HealthResponse

_STATUS_BY_ERROR: list[tuple[type[TenantAdminError], int]] = [
    (ValidationError, 400),
    (TenantNotFoundError, 404),
    (TenantAlreadyExistsError, 409),
    (ConfigReadError, 500),
    (ConfigWriteError, 500),
    (GatewayError, 502),
]


def status_for(exc: TenantAdminError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return 500


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TenantAdminError)
    async def tenant_admin_error_handler(request: Request, exc: TenantAdminError):
        body = ErrorResponse(
            error=exc.message,
            code=exc.code,
            detail=getattr(exc, "field", ""),
        )
        return JSONResponse(status_code=status_for(exc), content=body.model_dump())

    @app.get("/health", response_model=HealthResponse)
    async def health():
        return HealthResponse(version=settings.api_version, channel_type=settings.channel_type)

    from tenant_admin.tenants.router import router as tenant_router
    from tenant_admin.tenants.router import config_router

    app.include_router(tenant_router, prefix="/api", tags=["tenants"])
    app.include_router(config_router, prefix="/api", tags=["config"])

    return app
