from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from config.settings import Settings
from core.errors import PromptGlotError
from core.providers import ProviderRegistry, get_app_settings, get_providers
from core.validation import validate_edit_request
from models.edit import ImagePayload, InpaintMetadata, InpaintResponse
from services.inpaint_service import InpaintService

router = APIRouter(prefix="/inpaint", tags=["inpaint"])


def get_inpaint_service(
    providers: ProviderRegistry = Depends(get_providers),
    settings: Settings = Depends(get_app_settings),
) -> InpaintService:
    return InpaintService(providers, default_strength=settings.DEFAULT_STRENGTH)


async def read_upload(upload: Optional[UploadFile]) -> Optional[ImagePayload]:
    """Read an uploaded file once into memory"""
    if upload is None:
        return None
    data = await upload.read()
    return ImagePayload(data=data, content_type=upload.content_type or "", filename=upload.filename)


@router.post("", response_model=InpaintResponse, response_model_exclude_none=True)
async def inpaint_image(
    image: Optional[UploadFile] = File(None, description="Source image (jpeg, png or webp, max 10MB)"),
    prompt: Optional[str] = Form(None, description="Editing prompt"),
    language: Optional[str] = Form("af", description="Prompt language: en or af"),
    mask: Optional[UploadFile] = File(None, description="Optional mask image"),
    strength: Optional[str] = Form(None, description="Inpainting strength 0-1"),
    settings: Settings = Depends(get_app_settings),
    inpaint_service: InpaintService = Depends(get_inpaint_service),
):
    """Edit an image from an English or Afrikaans instruction"""
    edit_request = validate_edit_request(
        image=await read_upload(image),
        prompt=prompt,
        language=language,
        settings=settings,
        mask=await read_upload(mask),
        strength=strength,
    )

    result = await inpaint_service.inpaint(edit_request)
    outcome = result.outcome
    if not outcome.success:
        raise PromptGlotError(outcome.error or "Inpainting failed", code=outcome.code)

    metadata = None
    if result.resolution is not None:
        metadata = InpaintMetadata(
            action=result.resolution.action,
            subject=result.resolution.subject,
            has_double_negation=result.resolution.has_double_negation,
        )

    return InpaintResponse(
        success=True,
        image_base64=outcome.image_base64,
        content_type=outcome.content_type,
        translated_prompt=result.translated_prompt,
        original_prompt=result.original_prompt,
        metadata=metadata,
    )


@router.get("")
async def describe_inpaint(settings: Settings = Depends(get_app_settings)):
    return {
        "name": "Inpainting API",
        "version": settings.VERSION,
        "description": "Image inpainting with Afrikaans language support",
        "supportedLanguages": settings.SUPPORTED_LANGUAGES,
        "endpoints": {
            "POST": {
                "description": "Generate inpainted image",
                "contentType": "multipart/form-data",
                "parameters": {
                    "image": "File - Source image (required, max 10MB)",
                    "prompt": "string - Editing prompt (required)",
                    "language": "string - Prompt language (optional, default: af)",
                    "mask": "File - Mask image (optional)",
                    "strength": f"number - Inpainting strength 0-1 (optional, default: {settings.DEFAULT_STRENGTH:g})",
                },
                "supportedImageTypes": settings.ALLOWED_IMAGE_TYPES,
            }
        },
        "features": [
            "Afrikaans to English translation",
            "Double negation handling (nie...nie)",
            "Linguistic intent parsing (REMOVE/ADD/CHANGE)",
            "Search-and-replace for removals without a mask",
        ],
    }
