from typing import Dict, Literal

from pydantic import BaseModel

HealthStatus = Literal['healthy', 'degraded']


class ServiceStatus(BaseModel):
    status: str
    ready: bool


class HealthResponse(BaseModel):
    status: HealthStatus
    services: Dict[str, ServiceStatus]
    version: str
    environment: str
    timestamp: str
