"""Personalization presets and prompt templates."""

from convo_summarizer.personalization.engine import (
    PersonalizationError,
    generate_personalized_prompt,
    get_default_settings,
    validate_settings,
)
from convo_summarizer.personalization.loader import PresetCatalog, get_preset_catalog
from convo_summarizer.personalization.models import PersonalizationSettings

__all__ = [
    "PersonalizationError",
    "PersonalizationSettings",
    "PresetCatalog",
    "generate_personalized_prompt",
    "get_default_settings",
    "get_preset_catalog",
    "validate_settings",
]
