"""Payloads for the ``system`` procedures."""

from pydantic import Field

from .common import CamelModel


class HealthCheck(CamelModel):
    timestamp: float = Field(..., ge=0, description="Client clock, used only to bust caches")


class OwnerNotification(CamelModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
