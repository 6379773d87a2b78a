import base64
import logging
from typing import Awaitable

from core.errors import ConfigurationError, ProviderError, ProviderTimeout
from models.edit import EditOutcome, GeneratedImage

logger = logging.getLogger(__name__)


def outcome_from_image(image: GeneratedImage) -> EditOutcome:
    """Raw base64 only. Prefixing a data URL for display is up to the UI."""
    if not image.data:
        return EditOutcome(success=False, error="No edited image received from provider", code="EMPTY_RESULT")
    return EditOutcome(
        success=True,
        image_base64=base64.b64encode(image.data).decode("ascii"),
        content_type=image.content_type or "image/png",
    )


async def assemble_outcome(call: Awaitable[GeneratedImage]) -> EditOutcome:
    """
    Await a dispatched edit and normalize it into an EditOutcome.

    Provider failures (HTTP status, vendor body), timeouts and missing
    configuration become a failed outcome. Anything else propagates.
    """
    try:
        image = await call
    except (ProviderError, ProviderTimeout, ConfigurationError) as error:
        logger.error("Image edit failed [%s]: %s", error.code, error.message)
        return EditOutcome(success=False, error=error.message, code=error.code)

    return outcome_from_image(image)
