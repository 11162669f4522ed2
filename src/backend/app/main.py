import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import Settings, get_settings
from .core.errors import register_defect_boundary, register_exception_handlers
from .core.upstream import close_chat_client, init_chat_client, init_settings
from .api.ai import ai_route as ai_router
from .api.health import router as health_router

logger = logging.getLogger(__name__)


def _mask(secret: str) -> str:
    return f"{secret[:6]}..." if secret else "NOT SET"


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup
        logging.basicConfig(level=settings.log_level)
        logger.info("Model: %s, base URL: %s, API key: %s",
                    settings.model_name, settings.base_url, _mask(settings.api_key))
        if not settings.api_key_configured:
            logger.error("OPENAI_API_KEY (or XAI_API_KEY) is not set; model calls will fail")
        await init_chat_client(app, settings, transport=transport)
        try:
            yield
        finally:
            # Shutdown
            await close_chat_client(app)

    app = FastAPI(title="Paragraph Summarizer API", lifespan=lifespan)
    init_settings(app, settings)
    register_exception_handlers(app)

    # Innermost, so CORS and security headers also apply to its 500s
    register_defect_boundary(app)

    @app.middleware("http")
    async def security_headers(request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
        max_age=3600,
    )

    app.include_router(health_router)
    app.include_router(ai_router)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)
