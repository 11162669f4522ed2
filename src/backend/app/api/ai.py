from fastapi import APIRouter, Depends, status

from ..core.config import Settings
from ..core.errors import (
    ConfigurationError,
    NoChoicesError,
    ProxyError,
    UpstreamError,
    ValidationError,
    error_response,
)
from ..core.upstream import get_app_settings, get_chat_client
from ..schemas.ai import (
    SummarizeRequest,
    SummarizeResponse,
    TranslateRequest,
    TranslateResponse,
)
from ..services.ai_service import summarize_paragraphs, translate_text
from ..services.chat_client import ChatClient

ai_route = APIRouter(prefix='/api', tags=['ai'])


@ai_route.post('/summarize', response_model=SummarizeResponse)
async def summarize(
    request: SummarizeRequest,
    client: ChatClient = Depends(get_chat_client),
):
    try:
        summary = await summarize_paragraphs(client, request.paragraphs)
    except (ValidationError, ConfigurationError):
        raise
    except UpstreamError as exc:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'API request failed', exc.details)
    except ProxyError as exc:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Error generating summary', exc.details)

    return SummarizeResponse(
        summary=summary,
        paragraphCount=len(request.paragraphs or []),
        model=client.model,
    )


@ai_route.post('/translate', response_model=TranslateResponse, response_model_exclude_none=True)
async def translate(
    request: TranslateRequest,
    client: ChatClient = Depends(get_chat_client),
    settings: Settings = Depends(get_app_settings),
):
    try:
        outcome = await translate_text(client, settings, request.text, request.target)
    except (ValidationError, ConfigurationError):
        raise
    except UpstreamError as exc:
        if exc.upstream_status == status.HTTP_429_TOO_MANY_REQUESTS:
            return error_response(
                status.HTTP_429_TOO_MANY_REQUESTS,
                'Rate limited by translation service',
                'Please try again in a moment',
            )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Model API error', exc.details, model=client.model)
    except NoChoicesError as exc:
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f'Translation failed: {exc.details}',
            exc.details,
            model=client.model,
        )
    except ProxyError as exc:
        # Transport failures, timeouts and undecodable bodies
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, 'Translation API error', exc.details, model=client.model)

    return TranslateResponse(translatedText=outcome.text, warning=outcome.warning)
