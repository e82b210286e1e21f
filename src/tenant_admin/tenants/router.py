"""Tenant API router — requires the admin token."""

from typing import Any

from fastapi import APIRouter, Body, Depends

from tenant_admin.common.security import require_admin_token
from tenant_admin.tenants.schemas import (
    ChannelConfigResponse,
    GatewayHealthResponse,
    GatewayRestartStatus,
    TenantConfig,
    TenantCreateRequest,
    TenantMutationResponse,
    TenantUpdate,
)

router = APIRouter(prefix="/tenants", tags=["tenants"], dependencies=[Depends(require_admin_token)])
config_router = APIRouter(tags=["config"], dependencies=[Depends(require_admin_token)])


def _get_service():
    from tenant_admin.deps import get_tenant_service
    return get_tenant_service()


def _to_response(result) -> TenantMutationResponse:
    error = result.gateway_error
    return TenantMutationResponse(
        tenant=result.tenant,
        gateway_restart=GatewayRestartStatus(
            success=error is None,
            error=error.message if error is not None else None,
        ),
    )


@router.get("", response_model=list[TenantConfig])
async def list_tenants():
    return await _get_service().list_tenants()


@router.get("/{tenant_id}", response_model=TenantConfig)
async def get_tenant(tenant_id: str):
    return await _get_service().get_tenant(tenant_id)


@router.post("", response_model=TenantMutationResponse, status_code=201)
async def create_tenant(body: TenantCreateRequest):
    result = await _get_service().add_tenant(body.id, body)
    return _to_response(result)


@router.patch("/{tenant_id}", response_model=TenantMutationResponse)
async def update_tenant(tenant_id: str, body: TenantUpdate):
    result = await _get_service().update_tenant(tenant_id, body)
    return _to_response(result)


@router.delete("/{tenant_id}", response_model=TenantMutationResponse)
async def delete_tenant(tenant_id: str):
    result = await _get_service().remove_tenant(tenant_id)
    return _to_response(result)


@router.post("/{tenant_id}/pause", response_model=TenantMutationResponse)
async def pause_tenant(tenant_id: str):
    result = await _get_service().pause_tenant(tenant_id)
    return _to_response(result)


@router.post("/{tenant_id}/activate", response_model=TenantMutationResponse)
async def activate_tenant(tenant_id: str):
    result = await _get_service().activate_tenant(tenant_id)
    return _to_response(result)


@config_router.get("/config", response_model=ChannelConfigResponse)
async def get_channel_config():
    svc = _get_service()
    return ChannelConfigResponse(
        channel_type=svc.channel_type,
        channel_config=await svc.channel_config(),
    )


@config_router.patch("/config", response_model=TenantMutationResponse)
async def patch_config(partial: dict[str, Any] = Body(...)):
    result = await _get_service().patch_config(partial)
    return _to_response(result)


@config_router.get("/gateway/health", response_model=GatewayHealthResponse)
async def gateway_health():
    status = await _get_service().gateway_health()
    return GatewayHealthResponse(
        running=status.running, uptime=status.uptime, version=status.version
    )
