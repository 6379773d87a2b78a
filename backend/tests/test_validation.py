"""
Layer 1: request validation and sanitizing

These tests exercise core.validation without any network or app.
"""
import pytest

from conftest import PNG_BYTES, make_settings
from core.errors import (
    ImageTooLarge,
    InvalidImageType,
    InvalidLanguage,
    InvalidStrength,
    MissingImage,
    MissingPrompt,
)
from core.validation import (
    format_file_size,
    parse_strength,
    sanitize_input,
    validate_edit_request,
    validate_file_size,
    validate_language_code,
)
from models.edit import ImagePayload


def png(data=PNG_BYTES, content_type="image/png"):
    return ImagePayload(data=data, content_type=content_type, filename="photo.png")


@pytest.mark.unit
class TestSanitizeInput:

    def test_strips_angle_brackets_and_whitespace(self):
        assert sanitize_input("  <b>Verwyder</b> die appels  ") == "bVerwyder/b die appels"

    def test_removes_javascript_scheme_case_insensitive(self):
        assert sanitize_input("JavaScript:alert(1) appels") == "alert(1) appels"

    def test_removes_nested_javascript_scheme(self):
        assert sanitize_input("javajavascript:script:x") == "x"

    def test_brackets_hiding_a_scheme(self):
        assert sanitize_input("java<script:x") == "x"

    @pytest.mark.parametrize("text", [
        "",
        "   ",
        "Verwyder die appels nie op die tafel nie",
        "<<javascript:>>",
        "javajavascript:script: javascript:",
        " jaVAscript:  <x> ",
        "java\tscript: keep",
    ])
    def test_sanitize_is_idempotent(self, text):
        once = sanitize_input(text)
        assert sanitize_input(once) == once


@pytest.mark.unit
class TestSmallValidators:

    def test_language_codes(self):
        assert validate_language_code("af") is True
        assert validate_language_code("en") is True
        assert validate_language_code("de") is False

    def test_file_size_bounds(self):
        assert validate_file_size(1, 10) is True
        assert validate_file_size(10, 10) is True
        assert validate_file_size(0, 10) is False
        assert validate_file_size(11, 10) is False

    def test_format_file_size(self):
        assert format_file_size(0) == "0 Bytes"
        assert format_file_size(1536) == "1.5 KB"
        assert format_file_size(10 * 1024 * 1024) == "10 MB"

    @pytest.mark.parametrize("raw, expected", [(None, None), ("", None), ("  ", None), ("0", 0.0), ("1", 1.0), ("0.35", 0.35)])
    def test_parse_strength_accepts(self, raw, expected):
        assert parse_strength(raw) == expected

    @pytest.mark.parametrize("raw", ["-0.1", "1.01", "abc", "nan", "inf"])
    def test_parse_strength_rejects(self, raw):
        with pytest.raises(InvalidStrength):
            parse_strength(raw)


@pytest.mark.unit
class TestValidateEditRequest:

    def test_valid_request(self):
        settings = make_settings()
        request = validate_edit_request(png(), "  Verwyder <die> appels ", "af", settings, strength="0.5")

        assert request.prompt == "Verwyder die appels"
        assert request.language == "af"
        assert request.strength == 0.5
        assert request.mask is None
        assert request.action is None

    def test_missing_image_reported_before_everything_else(self):
        settings = make_settings()
        with pytest.raises(MissingImage) as exc_info:
            validate_edit_request(
                None, "", "xx", settings,
                mask=png(content_type="image/gif"), strength="7",
            )
        assert exc_info.value.code == "MISSING_IMAGE"
        assert exc_info.value.status_code == 400

    def test_empty_upload_counts_as_missing_image(self):
        with pytest.raises(MissingImage):
            validate_edit_request(png(data=b""), "prompt", "en", make_settings())

    @pytest.mark.parametrize("prompt", [None, "", "   ", "<>"])
    def test_missing_prompt(self, prompt):
        with pytest.raises(MissingPrompt):
            validate_edit_request(png(), prompt, "af", make_settings())

    def test_invalid_language(self):
        with pytest.raises(InvalidLanguage) as exc_info:
            validate_edit_request(png(), "prompt", "de", make_settings())
        assert "Supported: en, af" in exc_info.value.message

    def test_blank_language_defaults_to_afrikaans(self):
        request = validate_edit_request(png(), "prompt", "", make_settings())
        assert request.language == "af"

    def test_invalid_image_type(self):
        with pytest.raises(InvalidImageType) as exc_info:
            validate_edit_request(png(content_type="image/gif"), "prompt", "en", make_settings())
        assert exc_info.value.code == "INVALID_IMAGE_TYPE"

    def test_image_too_large(self):
        settings = make_settings()
        big = png(data=b"\x00" * (settings.MAX_UPLOAD_SIZE + 1))
        with pytest.raises(ImageTooLarge):
            validate_edit_request(big, "prompt", "en", settings)

    def test_image_at_limit_is_accepted(self):
        settings = make_settings()
        exact = png(data=b"\x00" * settings.MAX_UPLOAD_SIZE)
        assert validate_edit_request(exact, "prompt", "en", settings).image.size == settings.MAX_UPLOAD_SIZE

    def test_mask_gets_same_checks(self):
        with pytest.raises(InvalidImageType):
            validate_edit_request(png(), "prompt", "en", make_settings(), mask=png(content_type="text/plain"))

    def test_valid_mask_is_kept(self):
        request = validate_edit_request(png(), "prompt", "en", make_settings(), mask=png(content_type="image/webp"))
        assert request.mask is not None
        assert request.mask.content_type == "image/webp"
