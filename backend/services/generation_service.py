import json
import logging
import re
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from models.generate import GenerateOptions, GenerateResponse, Persona

logger = logging.getLogger(__name__)

FALLBACK_PERSONA = Persona(
    name="English Creative AI",
    description="Specialized in creating detailed, artistic prompts in English",
    style="detailed, artistic, cinematic",
    system_prompt="You are an expert creative AI. Transform user ideas into detailed English prompts.",
)


class GenerationService:
    """Text-to-image generation from a native language prompt"""

    def __init__(self, providers, prompts_dir: Optional[Path] = None):
        self.providers = providers
        self.prompts_dir = prompts_dir or Path(__file__).parent.parent / "prompts"

    def _read_persona(self, lang: str) -> Optional[Persona]:
        if not re.fullmatch(r"[A-Za-z]{2,3}(-[A-Za-z]{2,4})?", lang):
            return None
        persona_path = self.prompts_dir / lang / "system.json"
        if not persona_path.exists():
            return None
        try:
            with open(persona_path, 'r', encoding='utf-8') as f:
                return Persona.model_validate(json.load(f))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.error("Invalid persona file %s: %s", persona_path, e)
            return None

    def load_persona(self, lang: str) -> Persona:
        """
        Load the persona for a language.

        Falls back to the English persona, then to a built-in one.
        """
        persona = self._read_persona(lang)
        if persona is None:
            logger.warning("Failed to load persona for %s, falling back to English", lang)
            persona = self._read_persona("en") or FALLBACK_PERSONA
        return persona

    async def generate(self, prompt: str, lang: str, options: GenerateOptions) -> GenerateResponse:
        openai = self.providers.openai()
        persona = self.load_persona(lang)

        optimized_prompt = await openai.optimize_prompt(prompt, persona, options)
        image_url = await openai.generate_image(optimized_prompt, options)
        explanation = await openai.explain_transformation(prompt, optimized_prompt, lang)

        return GenerateResponse(
            image_url=image_url,
            explanation=explanation,
            optimized_prompt=optimized_prompt,
            original_prompt=prompt,
            language=lang,
        )
