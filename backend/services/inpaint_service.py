import logging
from typing import Optional

from models.edit import EditAction, EditRequest, GeneratedImage, InpaintResult, IntentResolution
from services.edit_router import dispatch_edit
from services.intent_resolver import IntentResolver
from services.result_assembler import assemble_outcome

logger = logging.getLogger(__name__)


class InpaintService:
    """Validated request -> intent resolution (af only) -> edit routing -> outcome."""

    def __init__(self, providers, default_strength: float = 0.8):
        self.providers = providers
        self.resolver = IntentResolver(providers)
        self.default_strength = default_strength

    async def _resolve(self, request: EditRequest) -> Optional[IntentResolution]:
        if request.language != "af":
            return None

        result = await self.resolver.resolve(request.prompt)
        if not result.success:
            # Translation outages must not block editing: keep the original prompt
            logger.warning("Translation failed, using original prompt: %s", result.error)
            return None
        return result.resolution

    async def _edit(self, request: EditRequest) -> GeneratedImage:
        return await dispatch_edit(request, self.providers.stability(), self.default_strength)

    async def inpaint(self, request: EditRequest) -> InpaintResult:
        original_prompt = request.prompt
        resolution = await self._resolve(request)

        if resolution is not None:
            negative_prompt = None
            if resolution.action == EditAction.REMOVE and resolution.subject:
                negative_prompt = resolution.subject
            request = request.model_copy(update={
                "prompt": resolution.translated,
                "action": resolution.action,
                "subject": resolution.subject,
                "negative_prompt": negative_prompt,
            })

        outcome = await assemble_outcome(self._edit(request))

        return InpaintResult(
            outcome=outcome,
            original_prompt=original_prompt,
            translated_prompt=request.prompt,
            resolution=resolution,
        )
