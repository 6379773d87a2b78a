"""
Layer 3: /api/translate end to end through the FastAPI app
"""
import pytest
from fastapi.testclient import TestClient

from conftest import FakeLingo, FakeOpenAI, make_settings
from core.errors import ProviderError
from core.providers import ProviderRegistry
from main import create_app
from models.edit import EditAction, IntentClassification

TRANSLATE_URL = "/api/translate"


def make_client(settings=None, **services):
    settings = settings or make_settings()
    return TestClient(create_app(settings, ProviderRegistry(settings, **services)))


@pytest.mark.integration
class TestTranslateEndpoint:

    def test_single_text(self):
        lingo = FakeLingo({"Verwyder die appels nie op die tafel nie": "Remove the apples not on the table not"})
        openai = FakeOpenAI(IntentClassification(
            action=EditAction.REMOVE, subject="apples", refined_prompt="remove the apples from the table",
        ))
        client = make_client(lingo=lingo, openai=openai)

        response = client.post(TRANSLATE_URL, json={"text": "Verwyder die appels nie op die tafel nie"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert "translations" not in body
        assert body["translation"] == {
            "original": "Verwyder die appels nie op die tafel nie",
            "translated": "remove the apples from the table",
            "action": "REMOVE",
            "subject": "apples",
            "metadata": {"hasDoubleNegation": True, "sourceLocale": "af", "targetLocale": "en-US"},
        }

    def test_text_is_sanitized_before_translation(self, client, fake_lingo):
        response = client.post(TRANSLATE_URL, json={"text": "  <b>hallo</b> "})

        assert response.status_code == 200
        assert fake_lingo.calls[0][0] == "bhallo/b"

    def test_batch_keeps_order(self, client):
        response = client.post(TRANSLATE_URL, json={"texts": ["een", "twee", "drie"], "sourceLocale": "af"})

        assert response.status_code == 200
        body = response.json()
        assert "translation" not in body
        assert [t["original"] for t in body["translations"]] == ["een", "twee", "drie"]
        assert [t["translated"] for t in body["translations"]] == ["EN: een", "EN: twee", "EN: drie"]

    def test_batch_at_limit_is_accepted(self, client):
        response = client.post(TRANSLATE_URL, json={"texts": [f"teks {i}" for i in range(50)]})

        assert response.status_code == 200
        assert len(response.json()["translations"]) == 50

    def test_batch_over_limit(self, client, fake_lingo):
        response = client.post(TRANSLATE_URL, json={"texts": [f"teks {i}" for i in range(51)]})

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Maximum 50 texts per batch request",
            "code": "INVALID_REQUEST",
        }
        assert fake_lingo.calls == []

    @pytest.mark.parametrize("payload, message", [
        ({"text": "   "}, "Text must be a non-empty string"),
        ({"text": ""}, "Text must be a non-empty string"),
        ({"text": 42}, "Text must be a non-empty string"),
        ({"text": "<>"}, "Text must be a non-empty string"),
        ({"text": "javascript:"}, "Text must be a non-empty string"),
        ({"texts": ["een", "   "]}, "All texts must be non-empty strings"),
        ({"texts": ["<>"]}, "All texts must be non-empty strings"),
        ({"texts": []}, "Texts array cannot be empty"),
        ({"texts": ["een", 2]}, "All texts must be strings"),
        ({"texts": "een"}, "Invalid request: provide text or texts"),
        ({}, "Invalid request: provide text or texts"),
    ])
    def test_bad_requests(self, client, fake_lingo, payload, message):
        response = client.post(TRANSLATE_URL, json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == message
        assert response.json()["code"] == "INVALID_REQUEST"
        assert fake_lingo.calls == []

    def test_invalid_source_locale(self, client):
        response = client.post(TRANSLATE_URL, json={"text": "hallo", "sourceLocale": "de"})

        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_LANGUAGE"

    def test_malformed_body(self, client):
        response = client.post(TRANSLATE_URL, content="not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_provider_failure(self):
        lingo = FakeLingo(error=ProviderError("lingo", "Lingo.dev API error (503): down", status=503))
        client = make_client(lingo=lingo, openai=FakeOpenAI())

        response = client.post(TRANSLATE_URL, json={"text": "hallo"})

        assert response.status_code == 500
        assert response.json()["code"] == "TRANSLATION_ERROR"
        assert response.json()["success"] is False

    def test_one_failure_fails_the_batch(self):
        class FlakyLingo(FakeLingo):
            async def translate(self, text, source_locale="af", target_locale="en-US"):
                if text == "twee":
                    raise ProviderError("lingo", "Lingo.dev API error (500): oops", status=500)
                return await super().translate(text, source_locale, target_locale)

        client = make_client(lingo=FlakyLingo(), openai=FakeOpenAI())

        response = client.post(TRANSLATE_URL, json={"texts": ["een", "twee", "drie"]})

        assert response.status_code == 500
        assert response.json()["code"] == "TRANSLATION_ERROR"

    def test_missing_translation_key(self):
        client = make_client(make_settings(LINGODOTDEV_API_KEY=None), openai=FakeOpenAI())

        response = client.post(TRANSLATE_URL, json={"text": "hallo"})

        assert response.status_code == 500
        assert response.json()["code"] == "CONFIGURATION_ERROR"

    def test_describe(self, client):
        response = client.get(TRANSLATE_URL)

        assert response.status_code == 200
        assert "max 50" in response.json()["endpoints"]["POST"]["parameters"]["texts"]
