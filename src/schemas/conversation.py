"""Conversation state schemas for the lead-capture chat widget."""

from enum import Enum, IntEnum
from typing import Optional

from pydantic import BaseModel, Field


class ConversationStep(IntEnum):
    """Scripted steps of the intake dialog.

    Order: greeting gate → name → location → study level → destination
    country → subject → language score → start date → consultation CTA → done.
    The numeric value only ever grows until the conversation is reset.
    """

    IDLE = 0
    NAME = 1
    LOCATION = 2
    STUDY_LEVEL = 3
    DESTINATION = 4
    SUBJECT = 5
    LANGUAGE_SCORE = 6
    START_DATE = 7
    CONSULTATION = 8
    COMPLETED = 9


class Sender(str, Enum):
    BOT = "bot"
    USER = "user"


class PromptKind(str, Enum):
    """How the widget should collect the answer to the current question."""

    TEXT = "text"
    OPTIONS = "options"
    COUNTRIES = "countries"  # destination country sub-prompt


class SubmissionStatus(str, Enum):
    NOT_SENT = "not_sent"
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"  # no submission endpoint configured


class Message(BaseModel):
    """Single chat bubble. Never modified after it is appended."""

    id: int
    sender: Sender
    text: str
    choices: Optional[list[str]] = None

    model_config = {"frozen": True}


class Prompt(BaseModel):
    """Question currently shown to the user."""

    text: str
    kind: PromptKind = PromptKind.TEXT
    choices: list[str] = []


class LeadIntake(BaseModel):
    """Data collected during the conversation, one field per step."""

    name: Optional[str] = None
    location: Optional[str] = None
    study_level: Optional[str] = Field(default=None, alias="studyLevel")
    destination_country: Optional[str] = Field(default=None, alias="destinationCountry")
    subject: Optional[str] = None
    language_score: Optional[str] = Field(default=None, alias="languageScore")
    start_date: Optional[str] = Field(default=None, alias="startDate")

    model_config = {"populate_by_name": True}


class ConversationState(BaseModel):
    """Full in-memory state of one chat widget session."""

    step: ConversationStep = ConversationStep.IDLE
    transcript: list[Message] = []
    intake: LeadIntake = Field(default_factory=LeadIntake)
    pending_prompt: Optional[Prompt] = None
    awaiting_text_input: bool = True  # greeting gate accepts text
    bot_typing: bool = False
    show_contact_info: bool = False
    consultation_requested: Optional[bool] = None
    submission_status: SubmissionStatus = SubmissionStatus.NOT_SENT

    @property
    def choices(self) -> list[str]:
        """Choice set awaiting selection, empty when none is shown."""
        if self.pending_prompt is None:
            return []
        return self.pending_prompt.choices
