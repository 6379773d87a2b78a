"""
Request validation and prompt sanitizing.

Everything here is local and synchronous: an edit request that fails these
checks never reaches the intent resolver or an image provider.
"""

import math
import re
from typing import Iterable, Optional

from config.settings import Settings
from core.errors import (
    ImageTooLarge,
    InvalidImageType,
    InvalidLanguage,
    InvalidStrength,
    MissingImage,
    MissingPrompt,
)
from models.edit import EditRequest, ImagePayload

_ANGLE_BRACKETS = re.compile(r"[<>]")
_JAVASCRIPT_SCHEME = re.compile(r"javascript:", re.IGNORECASE)


def sanitize_input(text: str) -> str:
    """
    Strip angle brackets and javascript: schemes from user text, then trim.

    Removing one ``javascript:`` can join its neighbours into a new one
    (``javajavascript:script:``), so that pass repeats until nothing changes.
    """
    cleaned = _ANGLE_BRACKETS.sub("", text)
    while True:
        stripped = _JAVASCRIPT_SCHEME.sub("", cleaned)
        if stripped == cleaned:
            break
        cleaned = stripped
    return cleaned.strip()


def validate_language_code(lang: str, supported_languages: Iterable[str] = ("en", "af")) -> bool:
    return lang in supported_languages


def validate_file_type(content_type: Optional[str], allowed_types: Iterable[str]) -> bool:
    return bool(content_type) and content_type.lower() in allowed_types


def validate_file_size(size: int, max_size: int) -> bool:
    return 0 < size <= max_size


def format_file_size(num_bytes: int) -> str:
    """Human readable size, e.g. 1536 -> '1.5 KB'"""
    if num_bytes <= 0:
        return "0 Bytes"
    units = ["Bytes", "KB", "MB", "GB"]
    index = min(int(math.floor(math.log(num_bytes, 1024))), len(units) - 1)
    value = round(num_bytes / math.pow(1024, index), 2)
    return f"{value:g} {units[index]}"


def parse_strength(raw: Optional[str]) -> Optional[float]:
    if raw is None or not str(raw).strip():
        return None
    try:
        strength = float(raw)
    except (TypeError, ValueError):
        raise InvalidStrength() from None
    if math.isnan(strength) or strength < 0 or strength > 1:
        raise InvalidStrength()
    return strength


def _check_image(payload: ImagePayload, settings: Settings, label: str) -> None:
    if not validate_file_type(payload.content_type, settings.ALLOWED_IMAGE_TYPES):
        raise InvalidImageType(
            f"Invalid {label} type. Supported types: {', '.join(settings.ALLOWED_IMAGE_TYPES)}"
        )
    if payload.size > settings.MAX_UPLOAD_SIZE:
        raise ImageTooLarge(
            f"{label.capitalize()} size must be less than {format_file_size(settings.MAX_UPLOAD_SIZE)}"
        )


def validate_edit_request(
    image: Optional[ImagePayload],
    prompt: Optional[str],
    language: Optional[str],
    settings: Settings,
    mask: Optional[ImagePayload] = None,
    strength: Optional[str] = None,
) -> EditRequest:
    """
    Build an EditRequest from raw form fields or raise a RequestValidationFailure.

    Checks run in a fixed order so a missing image is always reported first.
    """
    if image is None or image.size == 0:
        raise MissingImage()

    if prompt is None or not prompt.strip():
        raise MissingPrompt()

    language = (language or "af").strip()
    if not validate_language_code(language, settings.SUPPORTED_LANGUAGES):
        raise InvalidLanguage(
            f"Invalid language: {language}. Supported: {', '.join(settings.SUPPORTED_LANGUAGES)}"
        )

    parsed_strength = parse_strength(strength)

    _check_image(image, settings, "image")
    if mask is not None and mask.size > 0:
        _check_image(mask, settings, "mask")
    else:
        mask = None

    sanitized = sanitize_input(prompt)
    if not sanitized:
        raise MissingPrompt()

    return EditRequest(
        image=image,
        prompt=sanitized,
        language=language,
        mask=mask,
        strength=parsed_strength,
    )
