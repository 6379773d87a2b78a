import logging
from typing import Dict, Optional

from fastapi import Request

from config.settings import Settings
from core.errors import ConfigurationError
from services.lingo_service import LingoService
from services.openai_service import OpenAIService
from services.stability_service import StabilityService

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """
    Owns the external provider services for one application instance.

    Each service is built on first use and reused afterwards. A missing API key
    raises ConfigurationError at that point. Tests hand in fakes through the
    constructor instead of touching any global state.
    """

    def __init__(
        self,
        settings: Settings,
        lingo: Optional[LingoService] = None,
        openai: Optional[OpenAIService] = None,
        stability: Optional[StabilityService] = None,
    ):
        self.settings = settings
        self._lingo = lingo
        self._openai = openai
        self._stability = stability

    def _require(self, key: str) -> str:
        value = getattr(self.settings, key, None)
        if not value:
            raise ConfigurationError(key)
        return value

    def lingo(self) -> LingoService:
        if self._lingo is None:
            self._lingo = LingoService(
                self._require("LINGODOTDEV_API_KEY"),
                base_url=self.settings.LINGO_BASE_URL,
                timeout=self.settings.PROVIDER_TIMEOUT_SECONDS,
            )
        return self._lingo

    def openai(self) -> OpenAIService:
        if self._openai is None:
            self._openai = OpenAIService(
                self._require("OPENAI_API_KEY"),
                base_url=self.settings.OPENAI_BASE_URL,
                timeout=self.settings.PROVIDER_TIMEOUT_SECONDS,
                chat_model=self.settings.OPENAI_CHAT_MODEL,
                image_model=self.settings.OPENAI_IMAGE_MODEL,
            )
        return self._openai

    def stability(self) -> StabilityService:
        if self._stability is None:
            self._stability = StabilityService(
                self._require("STABILITY_API_KEY"),
                base_url=self.settings.STABILITY_BASE_URL,
                timeout=self.settings.PROVIDER_TIMEOUT_SECONDS,
                output_format=self.settings.STABILITY_OUTPUT_FORMAT,
            )
        return self._stability

    def configuration_status(self) -> Dict[str, bool]:
        """Which providers have credentials (or an injected service), without revealing values"""
        return {
            "lingo": self._lingo is not None or bool(self.settings.LINGODOTDEV_API_KEY),
            "openai": self._openai is not None or bool(self.settings.OPENAI_API_KEY),
            "stability": self._stability is not None or bool(self.settings.STABILITY_API_KEY),
        }

    async def aclose(self) -> None:
        for service in (self._lingo, self._openai, self._stability):
            if service is not None:
                await service.aclose()


def get_providers(request: Request) -> ProviderRegistry:
    return request.app.state.providers


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
