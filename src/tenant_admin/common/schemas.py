"""Shared Pydantic schemas for Tenant-Admin."""

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    service: str = "tenant-admin"
    channel_type: str = "slack"


class ErrorResponse(BaseModel):
    error: str
    code: str
    detail: str = ""
