"""Personalization data models."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field, field_validator
import re


MAX_CUSTOM_INSTRUCTIONS = 500

LengthOption = Literal["short", "medium", "long"]


class SummaryStyle(BaseModel):
    """A summary layout preset."""

    id: str = Field(..., description="Unique style identifier")
    name: str
    description: str
    icon: str = ""
    template: str = Field(..., description="Instruction block inserted into the prompt")
    example: str = ""
    is_pro: bool = Field(default=False, description="Restricted to paid plans")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Keep identifiers URL and YAML friendly."""
        if not re.match(r"^[a-z0-9_]+$", v):
            raise ValueError(f"Invalid style id: {v}")
        return v


class ToneOption(BaseModel):
    """A tone modifier appended to the style instructions."""

    id: str
    name: str
    description: str
    modifier: str
    example: str = ""


class FocusArea(BaseModel):
    id: str
    name: str
    description: str


class PresetCatalogFile(BaseModel):
    """Shape of the presets YAML document."""

    version: str = Field(default="1.0.0")
    styles: List[SummaryStyle] = Field(default_factory=list)
    tones: List[ToneOption] = Field(default_factory=list)
    focus_areas: List[FocusArea] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def validate_semver(cls, v: str) -> str:
        """Validate semantic versioning format."""
        semver_pattern = r"^\d+\.\d+\.\d+(?:-[a-zA-Z0-9.-]+)?(?:\+[a-zA-Z0-9.-]+)?$"
        if not re.match(semver_pattern, v):
            raise ValueError(f"Invalid semantic version: {v}")
        return v


class PersonalizationSettings(BaseModel):
    """User-selected preferences that shape the prompt."""

    style: str = "bullet_points"
    tone: str = "professional"
    focus_areas: List[str] = Field(default_factory=lambda: ["decisions", "actions"])
    custom_instructions: Optional[str] = None
    include_confidence: bool = True
    include_timestamps: bool = False
    max_length: LengthOption = "medium"
    language: str = "English"


class SettingsSuggestion(BaseModel):
    """Partial settings inferred from conversation content."""

    style: str
    tone: str
    focus_areas: List[str]


class ValidationReport(BaseModel):
    valid: bool
    errors: List[str] = Field(default_factory=list)
