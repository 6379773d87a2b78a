import asyncio
import logging
import re
from typing import List

from core.errors import PromptGlotError
from models.edit import IntentResolution, ResolutionResult

logger = logging.getLogger(__name__)

# Afrikaans negative concord: "nie ... nie"
_NEGATION_MARKER = re.compile(r"\bnie\b", re.IGNORECASE)


def detect_double_negation(text: str) -> bool:
    return len(_NEGATION_MARKER.findall(text)) >= 2


class IntentResolver:
    """Translate an Afrikaans prompt and classify it as REMOVE / ADD / CHANGE."""

    def __init__(self, providers):
        self.providers = providers

    async def resolve(self, text: str, source_locale: str = "af", target_locale: str = "en-US") -> ResolutionResult:
        """
        Resolve one prompt.

        Never raises for provider trouble: a failed translation, a failed or
        unparsable classification, a timeout or a missing API key all come
        back as ResolutionResult(success=False) so the caller decides whether
        to degrade or to surface the error.

        Returns:
            ResolutionResult with either a resolution or an error and code
        """
        has_double_negation = detect_double_negation(text)

        try:
            literal = await self.providers.lingo().translate(text, source_locale, target_locale)
            classification = await self.providers.openai().classify_intent(text, literal, has_double_negation)
        except PromptGlotError as error:
            logger.warning("Intent resolution failed for %r: %s", text, error.message)
            code = error.code if error.code in ("CONFIGURATION_ERROR", "TIMEOUT") else "TRANSLATION_ERROR"
            return ResolutionResult.failed(error.message, code=code)
        except Exception:
            logger.exception("Unexpected error resolving intent for %r", text)
            return ResolutionResult.failed("Translation failed")

        resolution = IntentResolution(
            original=text,
            translated=classification.refined_prompt or literal,
            action=classification.action,
            subject=classification.subject,
            has_double_negation=has_double_negation,
            source_locale=source_locale,
            target_locale=target_locale,
        )
        logger.info(
            "Translation: %r -> %r (action=%s, subject=%r, double_negation=%s)",
            text, resolution.translated, resolution.action, resolution.subject, has_double_negation,
        )
        return ResolutionResult.resolved(resolution)

    async def resolve_many(self, texts: List[str], source_locale: str = "af", target_locale: str = "en-US") -> List[ResolutionResult]:
        # gather keeps input order regardless of completion order
        return list(await asyncio.gather(
            *(self.resolve(text, source_locale, target_locale) for text in texts)
        ))
