from fastapi import APIRouter, Depends

from ..core.config import Settings
from ..core.upstream import get_app_settings
from ..schemas.ai import HealthResponse

router = APIRouter(tags=['health'])


def build_health(settings: Settings) -> HealthResponse:
    return HealthResponse(
        status='running',
        model=settings.model_name,
        apiKeyConfigured=settings.api_key_configured,
        baseURL=settings.base_url,
        message='API key is configured' if settings.api_key_configured else 'WARNING: API key not configured',
    )


@router.get('/api/health', response_model=HealthResponse)
def api_health(settings: Settings = Depends(get_app_settings)):
    return build_health(settings)


@router.get('/health', response_model=HealthResponse)
def health(settings: Settings = Depends(get_app_settings)):
    return build_health(settings)
