"""Personalized prompt generation and settings helpers."""

import re
import time
from typing import List, Optional

from convo_summarizer.personalization.loader import PresetCatalog, get_preset_catalog
from convo_summarizer.personalization.models import (
    MAX_CUSTOM_INSTRUCTIONS,
    PersonalizationSettings,
    SummaryStyle,
    ValidationReport,
)


class PersonalizationError(ValueError):
    """Raised when settings reference presets that do not exist."""


def generate_personalized_prompt(
    content: str,
    settings: PersonalizationSettings,
    catalog: Optional[PresetCatalog] = None,
) -> str:
    """
    Render the style, tone and focus instructions around ``content``.

    Args:
        content: Conversation text to analyze
        settings: User personalization settings
        catalog: Preset catalog, defaults to the global one

    Returns:
        Prompt text without the output-format contract

    Raises:
        PersonalizationError: If the style or tone is unknown
    """
    catalog = catalog or get_preset_catalog()
    style = catalog.get_style(settings.style)
    tone = catalog.get_tone(settings.tone)
    if style is None or tone is None:
        raise PersonalizationError("Invalid style or tone selection")

    focus_lines = []
    for area_id in settings.focus_areas:
        area = catalog.get_focus_area(area_id)
        if area:
            focus_lines.append(f"- {area.name}: {area.description}")

    custom = ""
    if settings.custom_instructions:
        custom = f"CUSTOM INSTRUCTIONS:\n{settings.custom_instructions}\n"

    return f"""You are an expert conversation analyst. Analyze the following conversation and create a summary.

STYLE INSTRUCTIONS:
{style.template.strip()}

TONE INSTRUCTIONS:
{tone.modifier}

FOCUS AREAS:
{chr(10).join(focus_lines)}

FORMATTING REQUIREMENTS:
- Maximum length: {settings.max_length}
- Include confidence indicators: {'Yes' if settings.include_confidence else 'No'}
- Include timestamps: {'Yes' if settings.include_timestamps else 'No'}
- Language: {settings.language}

{custom}
CONVERSATION TO ANALYZE:
{content}

Please provide a summary following the above specifications."""


def validate_settings(
    settings: PersonalizationSettings, catalog: Optional[PresetCatalog] = None
) -> ValidationReport:
    """Check settings against the catalog and the custom instruction limit."""
    catalog = catalog or get_preset_catalog()
    errors: List[str] = []

    if catalog.get_style(settings.style) is None:
        errors.append("Invalid summary style selected")

    if catalog.get_tone(settings.tone) is None:
        errors.append("Invalid tone option selected")

    invalid_areas = [
        area for area in settings.focus_areas if catalog.get_focus_area(area) is None
    ]
    if invalid_areas:
        errors.append(f"Invalid focus areas: {', '.join(invalid_areas)}")

    if (
        settings.custom_instructions
        and len(settings.custom_instructions) > MAX_CUSTOM_INSTRUCTIONS
    ):
        errors.append(
            f"Custom instructions must be under {MAX_CUSTOM_INSTRUCTIONS} characters"
        )

    return ValidationReport(valid=not errors, errors=errors)


def get_default_settings() -> PersonalizationSettings:
    """Settings applied for new users."""
    return PersonalizationSettings()


def get_available_styles(
    is_pro: bool, catalog: Optional[PresetCatalog] = None
) -> List[SummaryStyle]:
    catalog = catalog or get_preset_catalog()
    return [style for style in catalog.list_styles() if not style.is_pro or is_pro]


def create_custom_template(
    name: str, description: str, template: str, user_id: str
) -> SummaryStyle:
    """Build a user-defined pro style; the caller decides whether to register it."""
    suffix = re.sub(r"[^a-z0-9]", "", user_id[-4:].lower()) or "user"
    return SummaryStyle(
        id=f"custom_{int(time.time() * 1000)}_{suffix}",
        name=name,
        description=description,
        icon="🎨",
        template=template,
        example="Custom template - example will be generated based on usage",
        is_pro=True,
    )
