"""
Error taxonomy for the PromptGlot API.

Every error raised on purpose carries a machine-readable ``code`` and the
HTTP status it maps to. ``main.py`` turns them into the shared failure body
``{"success": false, "error": ..., "code": ...}``.
"""

from typing import Optional


class PromptGlotError(Exception):
    code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code

    def to_dict(self) -> dict:
        return {"success": False, "error": self.message, "code": self.code}


# Validation (400). Raised before any network call.

class RequestValidationFailure(PromptGlotError):
    code = "VALIDATION_ERROR"
    status_code = 400


class MissingImage(RequestValidationFailure):
    code = "MISSING_IMAGE"

    def __init__(self, message: str = "Image is required"):
        super().__init__(message)


class MissingPrompt(RequestValidationFailure):
    code = "MISSING_PROMPT"

    def __init__(self, message: str = "Prompt is required"):
        super().__init__(message)


class InvalidLanguage(RequestValidationFailure):
    code = "INVALID_LANGUAGE"


class InvalidStrength(RequestValidationFailure):
    code = "INVALID_STRENGTH"

    def __init__(self, message: str = "Strength must be between 0 and 1"):
        super().__init__(message)


class InvalidImageType(RequestValidationFailure):
    code = "INVALID_IMAGE_TYPE"


class ImageTooLarge(RequestValidationFailure):
    code = "IMAGE_TOO_LARGE"


class InvalidTranslationRequest(RequestValidationFailure):
    code = "INVALID_REQUEST"


# Provider side (500).

class TranslationError(PromptGlotError):
    code = "TRANSLATION_ERROR"

    def __init__(self, message: str, source_locale: Optional[str] = None, target_locale: Optional[str] = None):
        super().__init__(message)
        self.source_locale = source_locale
        self.target_locale = target_locale


class ProviderError(PromptGlotError):
    """Non-2xx (or unreachable) response from an external provider."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None):
        code = f"{provider.upper()}_ERROR_{status}" if status else f"{provider.upper()}_ERROR"
        super().__init__(message, code=code)
        self.provider = provider
        self.status = status


class ProviderTimeout(PromptGlotError):
    code = "TIMEOUT"

    def __init__(self, provider: str, timeout: float):
        super().__init__(f"{provider} request timed out after {timeout:g} seconds")
        self.provider = provider
        self.timeout = timeout


class ConfigurationError(PromptGlotError):
    code = "CONFIGURATION_ERROR"

    def __init__(self, config_key: str):
        super().__init__(f"Missing required environment variable: {config_key}")
        self.config_key = config_key


class InternalError(PromptGlotError):
    code = "INTERNAL_ERROR"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
