from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from config.settings import Settings
from core.providers import ProviderRegistry, get_app_settings, get_providers
from models.health import HealthResponse, ServiceStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    providers: ProviderRegistry = Depends(get_providers),
    settings: Settings = Depends(get_app_settings),
):
    """Report which providers are configured, never their keys"""
    services = {
        name: ServiceStatus(status="configured" if ready else "missing_api_key", ready=ready)
        for name, ready in providers.configuration_status().items()
    }
    services["api"] = ServiceStatus(status="operational", ready=True)

    all_ready = all(service.ready for service in services.values())

    return HealthResponse(
        status="healthy" if all_ready else "degraded",
        services=services,
        version=settings.VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    )
