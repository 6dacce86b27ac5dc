"""
Unit tests for per-type widget configuration models.
"""
import pydantic
import pytest

from funnelpress.schemas.widget_config import (
    WIDGET_CONFIG_MODELS,
    CtaButtonConfig,
    EmailCaptureConfig,
    FaqAccordionConfig,
    config_schema_for,
    template_context,
    unknown_default_keys,
    validate_widget_config,
)

EMAIL_DEFAULTS = {
    "title": "Get Free Access",
    "description": "Join thousands getting our free resources!",
    "button_text": "Subscribe Now",
}


class TestValidateWidgetConfig:
    """Test merging defaults with instance overrides."""

    def test_defaults_only(self):
        config = validate_widget_config("email-capture", EMAIL_DEFAULTS, {})

        assert isinstance(config, EmailCaptureConfig)
        assert config.title == "Get Free Access"
        assert config.email_placeholder == "Enter your email address"

    def test_override_wins(self):
        config = validate_widget_config("email-capture", EMAIL_DEFAULTS, {"title": "Join us"})

        assert config.title == "Join us"
        assert config.button_text == "Subscribe Now"

    def test_type_comes_from_definition(self):
        """A ``type`` key in the override cannot switch variants."""
        config = validate_widget_config(
            "email-capture", EMAIL_DEFAULTS, {"type": "cta-button"}
        )

        assert isinstance(config, EmailCaptureConfig)

    def test_unknown_key_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            validate_widget_config("email-capture", EMAIL_DEFAULTS, {"colour": "red"})

    def test_missing_required_field_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            validate_widget_config("cta-button", {}, {"text": "Buy"})

    def test_unknown_type_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            validate_widget_config("carousel", {}, {})

    def test_bad_value_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            validate_widget_config(
                "cta-button", {}, {"text": "Buy", "url": "/buy", "style": "loud"}
            )

    def test_nested_items_validated(self):
        config = validate_widget_config(
            "faq-accordion",
            {},
            {"items": [{"question": "Is it free?", "answer": "Yes."}]},
        )

        assert isinstance(config, FaqAccordionConfig)
        assert config.items[0].answer == "Yes."

    def test_empty_faq_rejected(self):
        with pytest.raises(pydantic.ValidationError):
            validate_widget_config("faq-accordion", {}, {"items": []})


class TestConfigHelpers:
    """Test schema and key helpers."""

    def test_unknown_default_keys(self):
        extra = unknown_default_keys("cta-button", {"text": "Go", "colour": "red", "type": "x"})

        assert extra == ["colour", "type"]

    def test_no_unknown_default_keys(self):
        assert unknown_default_keys("email-capture", EMAIL_DEFAULTS) == []

    def test_config_schema_lists_fields(self):
        schema = config_schema_for("cta-button")

        assert "text" in schema["properties"]
        assert "url" in schema["required"]

    def test_template_context_drops_type(self):
        config = CtaButtonConfig(text="Buy", url="https://shop.example.com")

        context = template_context(config)

        assert "type" not in context
        assert context["text"] == "Buy"

    def test_every_model_has_matching_literal(self):
        for widget_type, model in WIDGET_CONFIG_MODELS.items():
            assert model.model_fields["type"].default == widget_type
