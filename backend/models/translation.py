from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.edit import EditAction, IntentResolution


class TranslateRequest(BaseModel):
    # text/texts stay loosely typed so the route can answer with its own messages
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[Any] = None
    texts: Optional[Any] = None
    source_locale: str = Field("af", alias="sourceLocale")
    target_locale: str = Field("en-US", alias="targetLocale")


class TranslationMetadata(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_double_negation: bool
    source_locale: str
    target_locale: str


class TranslationResult(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    original: str
    translated: str
    action: Optional[EditAction] = None
    subject: Optional[str] = None
    metadata: TranslationMetadata

    @classmethod
    def from_resolution(cls, resolution: IntentResolution) -> "TranslationResult":
        return cls(
            original=resolution.original,
            translated=resolution.translated,
            action=resolution.action,
            subject=resolution.subject,
            metadata=TranslationMetadata(
                has_double_negation=resolution.has_double_negation,
                source_locale=resolution.source_locale,
                target_locale=resolution.target_locale,
            ),
        )


class TranslateResponse(BaseModel):
    success: bool = True
    translation: Optional[TranslationResult] = None
    translations: Optional[List[TranslationResult]] = None
