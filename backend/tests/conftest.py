"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

from fastapi.testclient import TestClient

from config.settings import Settings
from core.providers import ProviderRegistry
from models.edit import GeneratedImage, IntentClassification

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeLingo:
    """Stands in for LingoService; records every call"""

    def __init__(self, translations=None, error=None):
        self.translations = translations or {}
        self.error = error
        self.calls = []

    async def translate(self, text, source_locale="af", target_locale="en-US"):
        self.calls.append((text, source_locale, target_locale))
        if self.error:
            raise self.error
        return self.translations.get(text, f"EN: {text}")

    async def aclose(self):
        pass


class FakeOpenAI:
    def __init__(self, classification=None, error=None):
        self.classification = classification or IntentClassification()
        self.error = error
        self.calls = []
        self.generated = []

    async def classify_intent(self, original, literal_translation, has_double_negation):
        self.calls.append((original, literal_translation, has_double_negation))
        if self.error:
            raise self.error
        return self.classification

    async def optimize_prompt(self, user_prompt, persona, options):
        self.generated.append(("optimize", user_prompt, persona.name))
        return f"optimized {user_prompt}"

    async def generate_image(self, prompt, options):
        self.generated.append(("image", prompt, options.hd_resolution))
        return "https://images.test/generated.png"

    async def explain_transformation(self, original_prompt, optimized_prompt, lang):
        self.generated.append(("explain", original_prompt, lang))
        return f"explained in {lang}"

    async def aclose(self):
        pass


class FakeStability:
    def __init__(self, image=None, error=None):
        self.image = image or GeneratedImage(data=b"edited-image", content_type="image/png")
        self.error = error
        self.calls = []

    async def search_and_replace(self, image, search_prompt, prompt, negative_prompt=None):
        self.calls.append(("search_and_replace", {
            "image": image, "search_prompt": search_prompt,
            "prompt": prompt, "negative_prompt": negative_prompt,
        }))
        if self.error:
            raise self.error
        return self.image

    async def inpaint(self, image, prompt, mask=None, negative_prompt=None, strength=0.8):
        self.calls.append(("inpaint", {
            "image": image, "prompt": prompt, "mask": mask,
            "negative_prompt": negative_prompt, "strength": strength,
        }))
        if self.error:
            raise self.error
        return self.image

    async def aclose(self):
        pass


def make_settings(**overrides) -> Settings:
    values = {
        "LINGODOTDEV_API_KEY": "test-lingo-key",
        "OPENAI_API_KEY": "test-openai-key",
        "STABILITY_API_KEY": "test-stability-key",
        "ENVIRONMENT": "test",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def fake_lingo():
    return FakeLingo()


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def fake_stability():
    return FakeStability()


@pytest.fixture
def providers(settings, fake_lingo, fake_openai, fake_stability):
    return ProviderRegistry(settings, lingo=fake_lingo, openai=fake_openai, stability=fake_stability)


@pytest.fixture
def client(settings, providers):
    """Provide FastAPI test client wired to fake providers"""
    from main import create_app
    return TestClient(create_app(settings, providers))


@pytest.fixture
def png_bytes():
    return PNG_BYTES
