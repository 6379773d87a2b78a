import json
import logging
from typing import Any, Dict, List

from core.errors import ProviderError
from models.edit import EditAction, IntentClassification
from models.generate import GenerateOptions, Persona
from services.base_provider import ProviderService

logger = logging.getLogger(__name__)

INTENT_SYSTEM_PROMPT = """You classify image editing instructions written in Afrikaans.

You receive the original Afrikaans text and a literal English translation of it.
Return JSON with:
- action: "REMOVE", "ADD" or "CHANGE" (null if the instruction is not an edit)
- subject: the object the action applies to, as a short English noun phrase (null if unknown)
- refined_prompt: a short, clear English instruction for an image editing model

Afrikaans marks negation twice ("nie ... nie"). A literal translation of such a
sentence often reads as a confusing double negative. When the text contains a
double negation, the implied action is REMOVE. Otherwise infer ADD or CHANGE
from context.

Example: "Verwyder die appels nie op die tafel nie" ->
{"action": "REMOVE", "subject": "apples", "refined_prompt": "remove the apples from the table"}"""

INTENT_SCHEMA = {
    "name": "edit_intent",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "action": {"type": ["string", "null"], "enum": ["REMOVE", "ADD", "CHANGE", None]},
            "subject": {"type": ["string", "null"]},
            "refined_prompt": {"type": "string"},
        },
        "required": ["action", "subject", "refined_prompt"],
        "additionalProperties": False,
    },
}


class OpenAIService(ProviderService):
    """Chat completions and image generation on the OpenAI API."""

    name = "openai"
    label = "OpenAI"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        timeout: float = 60.0,
        client=None,
        chat_model: str = "gpt-4o",
        image_model: str = "dall-e-3",
    ):
        super().__init__(api_key, base_url, timeout=timeout, client=client)
        self.chat_model = chat_model
        self.image_model = image_model

    async def _chat(self, messages: List[Dict[str, Any]], **params: Any) -> str:
        payload = {"model": self.chat_model, "messages": messages}
        payload.update(params)

        response = await self._post("/chat/completions", json=payload, headers=self._headers())
        choices = self._json(response).get("choices")
        if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
            raise ProviderError(self.name, "No completion choices received from OpenAI")

        message = choices[0].get("message")
        content = message.get("content") if isinstance(message, dict) else None
        return content.strip() if isinstance(content, str) else ""

    async def classify_intent(self, original: str, literal_translation: str, has_double_negation: bool) -> IntentClassification:
        """Ask the chat model for {action, subject, refined_prompt}"""
        user_message = (
            f"Afrikaans: {original}\n"
            f"Literal English: {literal_translation}\n"
            f"Double negation present: {'yes' if has_double_negation else 'no'}"
        )
        content = await self._chat(
            [
                {"role": "system", "content": INTENT_SYSTEM_PROMPT},
                {"role": "user", "content": user_message},
            ],
            temperature=0,
            max_tokens=200,
            response_format={"type": "json_schema", "json_schema": INTENT_SCHEMA},
        )
        if not content:
            raise ProviderError(self.name, "No intent classification received from OpenAI")

        try:
            parsed = json.loads(content)
        except json.JSONDecodeError:
            raise ProviderError(self.name, f"Unparsable intent classification: {content[:100]}")
        if not isinstance(parsed, dict):
            raise ProviderError(self.name, "Intent classification is not a JSON object")

        subject = parsed.get("subject")
        refined = parsed.get("refined_prompt")
        logger.info("Intent classified: action=%s subject=%r", parsed.get("action"), subject)
        return IntentClassification(
            action=EditAction.parse(parsed.get("action")),
            subject=subject.strip() if isinstance(subject, str) and subject.strip() else None,
            refined_prompt=refined.strip() if isinstance(refined, str) and refined.strip() else None,
        )

    async def optimize_prompt(self, user_prompt: str, persona: Persona, options: GenerateOptions) -> str:
        system = (
            f"You are {persona.name}, {persona.description}. Transform the user's native language prompt "
            "into a highly detailed, artistic English prompt optimized for DALL-E 3. Consider cultural nuances "
            "and visual aesthetics. Make it vivid, specific, and artistically rich. "
            f"Current options: {options.model_dump_json(by_alias=True)}"
        )
        optimized = await self._chat(
            [
                {"role": "system", "content": system},
                {"role": "user", "content": f'Transform this into an optimized English prompt: "{user_prompt}"'},
            ],
            max_tokens=500,
            temperature=0.8,
        )
        return optimized or user_prompt

    async def generate_image(self, prompt: str, options: GenerateOptions) -> str:
        """Generate one image and return its URL"""
        extras = ""
        if options.hd_resolution:
            extras += "High definition, ultra detailed, "
        if options.ray_tracing:
            extras += "Ray tracing, photorealistic, "
        if options.depth_mapping:
            extras += "Depth mapped, 3D rendered, "

        payload = {
            "model": self.image_model,
            "prompt": f"{prompt}. {extras}Professional quality, masterpiece, 8k resolution",
            "n": 1,
            "size": "1024x1024",
            "quality": "hd" if options.hd_resolution else "standard",
        }
        response = await self._post("/images/generations", json=payload, headers=self._headers())
        images = self._json(response).get("data")
        first = images[0] if isinstance(images, list) and images else None
        image_url = first.get("url") if isinstance(first, dict) else None
        if not isinstance(image_url, str) or not image_url:
            raise ProviderError(self.name, "No generated image received from OpenAI")
        return image_url

    async def explain_transformation(self, original_prompt: str, optimized_prompt: str, lang: str) -> str:
        explanation = await self._chat(
            [
                {
                    "role": "system",
                    "content": f"Explain in {lang} the transformation process from the original prompt to the "
                               "optimized version. Keep it educational and informative.",
                },
                {
                    "role": "user",
                    "content": f'Original: "{original_prompt}"\nOptimized: "{optimized_prompt}"\n'
                               "Explain what changes were made and why.",
                },
            ],
            max_tokens=300,
            temperature=0.7,
        )
        return explanation or "Image generated successfully."
