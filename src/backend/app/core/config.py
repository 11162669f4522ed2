from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List
from functools import lru_cache
import os
from dotenv import load_dotenv


DEFAULT_MODEL_NAME = "gpt-oss-20b"
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_HTTP_REFERER = "https://paragraph-summarizer-backend.vercel.app"
DEFAULT_APP_TITLE = "Paragraph Summarizer Chrome Extension"


class Settings(BaseSettings):
    # Values come from get_settings(); the prefix keeps stray env vars out
    model_config = SettingsConfigDict(frozen=True, env_prefix="SUMMARIZER_", protected_namespaces=())

    app_name: str = "paragraph-summarizer"
    app_env: str = "development"
    log_level: str = "INFO"
    port: int = 3000
    api_key: str = ""
    model_name: str = DEFAULT_MODEL_NAME
    base_url: str = DEFAULT_BASE_URL
    http_referer: str = DEFAULT_HTTP_REFERER
    app_title: str = DEFAULT_APP_TITLE
    request_timeout_seconds: float = 90.0
    translate_timeout_seconds: float = 60.0
    reasoning_fallback_enabled: bool = True
    cors_allow_origins: List[str] = ["*"]

    @property
    def api_key_configured(self) -> bool:
        return bool(self.api_key)

    @property
    def chat_completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise RuntimeError(f'{name} must be a number') from exc


@lru_cache()
def get_settings() -> Settings:
    load_dotenv()

    # OPENAI_API_KEY wins; XAI_API_KEY is kept for older deployments
    api_key = os.getenv('OPENAI_API_KEY') or os.getenv('XAI_API_KEY') or ''
    model_name = os.getenv('MODEL_NAME') or DEFAULT_MODEL_NAME
    base_url = (os.getenv('OPENAI_BASE_URL') or DEFAULT_BASE_URL).rstrip('/')

    port_val = os.getenv('PORT', '3000')
    try:
        port = int(port_val)
    except ValueError as exc:
        raise RuntimeError('PORT must be an integer') from exc

    cors_origins = os.getenv('CORS_ALLOW_ORIGINS')
    if cors_origins:
        cors_allow_origins = [o.strip() for o in cors_origins.split(',') if o.strip()]
    else:
        cors_allow_origins = ["*"]

    reasoning_fallback_enabled = os.getenv('REASONING_FALLBACK_ENABLED', 'true').lower() in ('1', 'true', 'yes')

    return Settings(
        app_env=os.getenv('APP_ENV', 'development'),
        log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
        port=port,
        api_key=api_key,
        model_name=model_name,
        base_url=base_url,
        http_referer=os.getenv('HTTP_REFERER', DEFAULT_HTTP_REFERER),
        app_title=os.getenv('APP_TITLE', DEFAULT_APP_TITLE),
        request_timeout_seconds=_env_float('UPSTREAM_TIMEOUT_SECONDS', 90.0),
        translate_timeout_seconds=_env_float('TRANSLATE_TIMEOUT_SECONDS', 60.0),
        reasoning_fallback_enabled=reasoning_fallback_enabled,
        cors_allow_origins=cors_allow_origins,
    )
