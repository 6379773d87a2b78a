from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class EditAction(str, Enum):
    REMOVE = "REMOVE"
    ADD = "ADD"
    CHANGE = "CHANGE"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["EditAction"]:
        """Normalize a provider supplied action, None when it is not one of ours"""
        if not value or not isinstance(value, str):
            return None
        try:
            return cls(value.strip().upper())
        except ValueError:
            return None


class ImagePayload(BaseModel):
    data: bytes
    content_type: str
    filename: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.data)


class EditRequest(BaseModel):
    """A validated edit. Only ever built by core.validation."""
    image: ImagePayload
    prompt: str
    language: str
    mask: Optional[ImagePayload] = None
    strength: Optional[float] = Field(None, ge=0.0, le=1.0)
    negative_prompt: Optional[str] = None
    action: Optional[EditAction] = None
    subject: Optional[str] = None


class IntentResolution(BaseModel):
    original: str
    translated: str
    action: Optional[EditAction] = None
    subject: Optional[str] = None
    has_double_negation: bool
    source_locale: str = "af"
    target_locale: str = "en-US"


class IntentClassification(BaseModel):
    action: Optional[EditAction] = None
    subject: Optional[str] = None
    refined_prompt: Optional[str] = None


class ResolutionResult(BaseModel):
    success: bool
    resolution: Optional[IntentResolution] = None
    error: Optional[str] = None
    code: Optional[str] = None

    @classmethod
    def resolved(cls, resolution: IntentResolution) -> "ResolutionResult":
        return cls(success=True, resolution=resolution)

    @classmethod
    def failed(cls, error: str, code: str = "TRANSLATION_ERROR") -> "ResolutionResult":
        return cls(success=False, error=error, code=code)


class GeneratedImage(BaseModel):
    data: bytes
    content_type: str = "image/png"


class EditOutcome(BaseModel):
    success: bool
    image_base64: Optional[str] = None
    content_type: Optional[str] = None
    error: Optional[str] = None
    code: Optional[str] = None

    @model_validator(mode="after")
    def check_exclusive_fields(self) -> "EditOutcome":
        has_image = bool(self.image_base64) and bool(self.content_type)
        if self.success:
            if not has_image or self.error:
                raise ValueError("successful outcome needs image_base64 and content_type and no error")
        else:
            if not self.error or self.image_base64 or self.content_type:
                raise ValueError("failed outcome needs an error and no image fields")
        return self


class InpaintResult(BaseModel):
    outcome: EditOutcome
    original_prompt: str
    translated_prompt: str
    resolution: Optional[IntentResolution] = None


class InpaintMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    action: Optional[EditAction] = None
    subject: Optional[str] = None
    has_double_negation: bool


class InpaintResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    image_base64: str
    content_type: str
    translated_prompt: str
    original_prompt: str
    metadata: Optional[InpaintMetadata] = None
