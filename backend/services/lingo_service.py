import logging
from typing import Optional

from core.errors import ProviderError
from services.base_provider import ProviderService

logger = logging.getLogger(__name__)


class LingoService(ProviderService):
    """Literal translations through the Lingo.dev localization engine."""

    name = "lingo"
    label = "Lingo.dev"

    def __init__(self, api_key: str, base_url: str = "https://engine.lingo.dev", timeout: float = 60.0, client=None):
        super().__init__(api_key, base_url, timeout=timeout, client=client)

    async def translate(
        self,
        text: str,
        source_locale: str = "af",
        target_locale: str = "en-US",
        workflow_id: Optional[str] = None,
    ) -> str:
        """Translate one string, raises ProviderError/ProviderTimeout on failure"""
        payload = {
            "params": {"workflowId": workflow_id or "promptglot", "fast": True},
            "locale": {"source": source_locale, "target": target_locale},
            "data": {"text": text},
        }

        response = await self._post(
            "/i18n",
            json=payload,
            headers=self._headers(**{"Content-Type": "application/json; charset=utf-8"}),
        )

        payload_data = self._json(response).get("data")
        translated = payload_data.get("text") if isinstance(payload_data, dict) else None
        if not isinstance(translated, str) or not translated.strip():
            raise ProviderError(self.name, "No translation received from Lingo.dev")

        logger.debug("Lingo.dev %s -> %s: %r -> %r", source_locale, target_locale, text, translated)
        return translated.strip()
