from fastapi import APIRouter, Depends

from core.errors import InvalidTranslationRequest
from core.providers import ProviderRegistry, get_providers
from core.validation import sanitize_input
from models.generate import GenerateRequest, GenerateResponse
from services.generation_service import GenerationService

router = APIRouter(prefix="/generate", tags=["generate"])


def get_generation_service(providers: ProviderRegistry = Depends(get_providers)) -> GenerationService:
    return GenerationService(providers)


@router.post("", response_model=GenerateResponse)
async def generate_image(
    request: GenerateRequest,
    generation_service: GenerationService = Depends(get_generation_service),
):
    """Generate a new image from a native language prompt"""
    prompt = sanitize_input(request.prompt or "")
    lang = (request.lang or "").strip()
    if not prompt or not lang:
        raise InvalidTranslationRequest("Missing required fields: prompt and lang")

    return await generation_service.generate(prompt, lang, request.options)
