from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GenerateOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    hd_resolution: bool = False
    depth_mapping: bool = False
    ray_tracing: bool = False
    neural_weight: Optional[float] = None


class GenerateRequest(BaseModel):
    prompt: Optional[str] = None
    lang: Optional[str] = None
    options: GenerateOptions = Field(default_factory=GenerateOptions)


class Persona(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    description: str
    style: Optional[str] = None
    system_prompt: Optional[str] = None


class GenerateResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = True
    image_url: str
    explanation: str
    optimized_prompt: str
    original_prompt: str
    language: str
