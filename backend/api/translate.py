import logging

from fastapi import APIRouter, Depends

from config.settings import Settings
from core.errors import ConfigurationError, InvalidLanguage, InvalidTranslationRequest, PromptGlotError, TranslationError
from core.providers import ProviderRegistry, get_app_settings, get_providers
from core.validation import sanitize_input, validate_language_code
from models.edit import ResolutionResult
from models.translation import TranslateRequest, TranslateResponse, TranslationResult
from services.intent_resolver import IntentResolver

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/translate", tags=["translate"])


def get_intent_resolver(providers: ProviderRegistry = Depends(get_providers)) -> IntentResolver:
    return IntentResolver(providers)


def raise_for_failure(result: ResolutionResult, request: TranslateRequest) -> None:
    if result.success:
        return
    if result.code == "CONFIGURATION_ERROR":
        raise PromptGlotError(result.error, code=ConfigurationError.code)
    if result.code == "TIMEOUT":
        raise PromptGlotError(result.error, code="TIMEOUT")
    raise TranslationError(result.error or "Translation failed", request.source_locale, request.target_locale)


@router.post("", response_model=TranslateResponse, response_model_exclude_none=True)
async def translate(
    request: TranslateRequest,
    settings: Settings = Depends(get_app_settings),
    resolver: IntentResolver = Depends(get_intent_resolver),
):
    """Translate one text (text) or a batch (texts) and classify the edit intent"""
    if not validate_language_code(request.source_locale, settings.SUPPORTED_LANGUAGES):
        raise InvalidLanguage(
            f"Invalid source language: {request.source_locale}. Supported: {', '.join(settings.SUPPORTED_LANGUAGES)}"
        )

    if request.text is not None:
        text = sanitize_input(request.text) if isinstance(request.text, str) else ""
        if not text:
            raise InvalidTranslationRequest("Text must be a non-empty string")

        result = await resolver.resolve(text, request.source_locale, request.target_locale)
        raise_for_failure(result, request)
        return TranslateResponse(translation=TranslationResult.from_resolution(result.resolution))

    if isinstance(request.texts, list):
        if len(request.texts) == 0:
            raise InvalidTranslationRequest("Texts array cannot be empty")
        if len(request.texts) > settings.MAX_BATCH_TRANSLATIONS:
            raise InvalidTranslationRequest(
                f"Maximum {settings.MAX_BATCH_TRANSLATIONS} texts per batch request"
            )
        if not all(isinstance(t, str) for t in request.texts):
            raise InvalidTranslationRequest("All texts must be strings")

        sanitized = [sanitize_input(t) for t in request.texts]
        if not all(sanitized):
            raise InvalidTranslationRequest("All texts must be non-empty strings")

        results = await resolver.resolve_many(sanitized, request.source_locale, request.target_locale)
        for result in results:
            raise_for_failure(result, request)

        logger.info("Batch translated %d texts", len(results))
        return TranslateResponse(
            translations=[TranslationResult.from_resolution(r.resolution) for r in results]
        )

    raise InvalidTranslationRequest("Invalid request: provide text or texts")


@router.get("")
async def describe_translate(settings: Settings = Depends(get_app_settings)):
    return {
        "name": "Translation API",
        "version": settings.VERSION,
        "description": "Translates Afrikaans text to English and resolves edit intent",
        "supportedLanguages": settings.SUPPORTED_LANGUAGES,
        "endpoints": {
            "POST": {
                "description": "Translate text",
                "parameters": {
                    "text": "string - Single text to translate",
                    "texts": f"string[] - Multiple texts to translate (max {settings.MAX_BATCH_TRANSLATIONS})",
                    "sourceLocale": "string - Source language (default: af)",
                    "targetLocale": "string - Target language (default: en-US)",
                },
            }
        },
    }
