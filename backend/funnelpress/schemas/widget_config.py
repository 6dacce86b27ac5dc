"""
Per-type widget configuration.

Every widget type has exactly one configuration model. Instance configuration
is the definition's ``default_config`` overlaid with the instance override and
must validate against the model selected by the definition's ``widget_type``.
"""
from datetime import datetime
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class WidgetConfigBase(BaseModel):
    """Closed configuration: unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")


class EmailCaptureConfig(WidgetConfigBase):
    type: Literal["email-capture"] = "email-capture"
    title: str
    description: str
    button_text: str
    email_placeholder: str = "Enter your email address"
    privacy_text: str = ""
    button_styles: str = ""
    container_styles: str = ""


class ExitIntentPopupConfig(WidgetConfigBase):
    type: Literal["exit-intent-popup"] = "exit-intent-popup"
    headline: str
    message: str
    button_text: str
    email_placeholder: str = "Your email address"


class CtaButtonConfig(WidgetConfigBase):
    type: Literal["cta-button"] = "cta-button"
    text: str
    url: str
    style: Literal["primary", "secondary", "ghost"] = "primary"
    open_in_new_tab: bool = False


class CountdownTimerConfig(WidgetConfigBase):
    type: Literal["countdown-timer"] = "countdown-timer"
    headline: str
    end_date: datetime
    expired_message: str = "This offer has expired."


class TestimonialConfig(WidgetConfigBase):
    type: Literal["testimonial"] = "testimonial"
    quote: str
    author: str
    role: str = ""
    rating: int = Field(default=5, ge=1, le=5)
    image: str | None = None


class ComparisonRow(WidgetConfigBase):
    label: str
    values: list[str]


class ComparisonTableConfig(WidgetConfigBase):
    type: Literal["comparison-table"] = "comparison-table"
    title: str = ""
    columns: list[str] = Field(min_length=1)
    rows: list[ComparisonRow] = []


class FaqItem(WidgetConfigBase):
    question: str
    answer: str


class FaqAccordionConfig(WidgetConfigBase):
    type: Literal["faq-accordion"] = "faq-accordion"
    title: str = ""
    items: list[FaqItem] = Field(min_length=1)


class TextBlockConfig(WidgetConfigBase):
    type: Literal["text-block"] = "text-block"
    content: str
    alignment: Literal["left", "center", "right"] = "left"


WidgetConfig = Annotated[
    Union[
        EmailCaptureConfig,
        ExitIntentPopupConfig,
        CtaButtonConfig,
        CountdownTimerConfig,
        TestimonialConfig,
        ComparisonTableConfig,
        FaqAccordionConfig,
        TextBlockConfig,
    ],
    Field(discriminator="type"),
]

WIDGET_CONFIG_MODELS: dict[str, type[WidgetConfigBase]] = {
    "email-capture": EmailCaptureConfig,
    "exit-intent-popup": ExitIntentPopupConfig,
    "cta-button": CtaButtonConfig,
    "countdown-timer": CountdownTimerConfig,
    "testimonial": TestimonialConfig,
    "comparison-table": ComparisonTableConfig,
    "faq-accordion": FaqAccordionConfig,
    "text-block": TextBlockConfig,
}

widget_config_adapter = TypeAdapter(WidgetConfig)


def validate_widget_config(
    widget_type: str,
    default_config: dict[str, Any] | None,
    config: dict[str, Any] | None,
) -> WidgetConfigBase:
    """Validate the merged configuration for ``widget_type``.

    Raises ``pydantic.ValidationError`` on unknown types, unknown keys, or
    bad values.
    """
    merged = {**(default_config or {}), **(config or {})}
    merged["type"] = widget_type
    return widget_config_adapter.validate_python(merged)


def unknown_default_keys(widget_type: str, default_config: dict[str, Any]) -> list[str]:
    """Keys of a definition's defaults that its variant does not declare."""
    model = WIDGET_CONFIG_MODELS[widget_type]
    return sorted(k for k in default_config if k not in model.model_fields or k == "type")


def config_schema_for(widget_type: str) -> dict[str, Any]:
    return WIDGET_CONFIG_MODELS[widget_type].model_json_schema()


def template_context(config: WidgetConfigBase) -> dict[str, Any]:
    return config.model_dump(exclude={"type"})
