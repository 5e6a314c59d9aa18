# convo_summarizer/api/schemas.py
from typing import Any, Dict, List, Literal, Optional
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)

from convo_summarizer.personalization.models import (
    MAX_CUSTOM_INSTRUCTIONS,
    FocusArea,
    PersonalizationSettings,
    SummaryStyle,
    ToneOption,
)
from convo_summarizer.summarizer.models import SummaryContext, SummaryRequest
from convo_summarizer.summarizer.slack import SlackSummarizationOptions

SourceLiteral = Literal["slack", "manual", "api"]
LengthLiteral = Literal["short", "medium", "long"]


class ContextModel(BaseModel):
    source: SourceLiteral = Field(default="manual")
    channel: Optional[str] = None
    participants: List[str] = Field(default_factory=list)
    duration: Optional[float] = Field(default=None, ge=0)

    def to_domain(self) -> SummaryContext:
        return SummaryContext(
            source=self.source,
            channel=self.channel,
            participants=list(self.participants),
            duration=self.duration,
        )


class PersonalizationModel(BaseModel):
    # accept camelCase from the web client and snake_case from scripts
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    style: str = Field(default="bullet_points")
    tone: str = Field(default="professional")
    focus_areas: List[str] = Field(
        default_factory=lambda: ["decisions", "actions"],
        validation_alias=AliasChoices("focusAreas", "focus_areas"),
    )
    custom_instructions: Optional[str] = Field(
        default=None,
        max_length=MAX_CUSTOM_INSTRUCTIONS,
        validation_alias=AliasChoices("customInstructions", "custom_instructions"),
    )
    include_confidence: bool = Field(
        default=True,
        validation_alias=AliasChoices("includeConfidence", "include_confidence"),
    )
    include_timestamps: bool = Field(
        default=False,
        validation_alias=AliasChoices("includeTimestamps", "include_timestamps"),
    )
    max_length: LengthLiteral = Field(
        default="medium", validation_alias=AliasChoices("maxLength", "max_length")
    )
    language: str = Field(default="English")

    def to_domain(self) -> PersonalizationSettings:
        return PersonalizationSettings(**self.model_dump())


class PersonalizationDraftModel(PersonalizationModel):
    """Unchecked settings submitted for validation."""

    custom_instructions: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("customInstructions", "custom_instructions"),
    )


class SummarizeRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    text: str = Field(
        ...,
        validation_alias=AliasChoices("transcriptText", "text"),
        description="Conversation or document text to summarize.",
    )
    user_id: str = Field(
        default="anonymous", validation_alias=AliasChoices("userId", "user_id")
    )
    team_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("teamId", "team_id")
    )
    tags: List[str] = Field(default_factory=list)
    context: Optional[ContextModel] = None
    personalization: Optional[PersonalizationModel] = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        if isinstance(value, list):
            return [str(item) for item in value]
        return [str(value)]

    def to_domain(self) -> SummaryRequest:
        return SummaryRequest(
            text=self.text,
            user_id=self.user_id,
            team_id=self.team_id,
            tags=list(self.tags),
            context=self.context.to_domain() if self.context else None,
            personalization=(
                self.personalization.to_domain() if self.personalization else None
            ),
        )


class SlackOptionsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    style: Literal["brief", "detailed", "executive"] = Field(default="detailed")
    focus: Literal["decisions", "actions", "discussion", "all"] = Field(default="all")
    include_participants: bool = Field(
        default=True,
        validation_alias=AliasChoices("includeParticipants", "include_participants"),
    )
    include_timestamps: bool = Field(
        default=False,
        validation_alias=AliasChoices("includeTimestamps", "include_timestamps"),
    )
    max_length: int = Field(
        default=500, ge=50, le=5000, validation_alias=AliasChoices("maxLength", "max_length")
    )

    def to_domain(self) -> SlackSummarizationOptions:
        return SlackSummarizationOptions(**self.model_dump())


class SlackSummarizeRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    content: str = Field(..., min_length=1)
    channel_name: str = Field(
        ..., min_length=1, validation_alias=AliasChoices("channelName", "channel_name")
    )
    options: SlackOptionsModel = Field(default_factory=SlackOptionsModel)


class SummaryResponseModel(BaseModel):
    data: Dict[str, Any]


class PersonalizationOptionsModel(BaseModel):
    styles: List[SummaryStyle]
    tones: List[ToneOption]
    focus_areas: List[FocusArea]
    defaults: PersonalizationSettings


class ValidationResponseModel(BaseModel):
    valid: bool
    errors: List[str]


class SuggestRequestModel(BaseModel):
    content: str = Field(..., min_length=1)
    conversation_type: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("conversationType", "conversation_type"),
    )


class SuggestResponseModel(BaseModel):
    style: str
    tone: str
    focus_areas: List[str]
    recommended_styles: List[str]
