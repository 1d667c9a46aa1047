"""Base class for conversation steps."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

from src.schemas.conversation import ConversationState, ConversationStep, PromptKind


# Shown when the user's answer does not fit the current question
FALLBACK_TEXT = "I didn't understand that. Please follow the prompts."

OTHER_OPTION = "Other"


@dataclass
class BotReply:
    """One scripted bot message."""

    text: str
    prompt_kind: Optional[PromptKind] = None  # set when the message asks a question
    choices: list[str] = field(default_factory=list)
    follow_up: bool = False  # gets its own "typing…" pause before it is shown


@dataclass
class StepResult:
    """Result of processing a conversation step."""

    replies: list[BotReply] = field(default_factory=list)
    next_step: Optional[ConversationStep] = None  # None = stay on current step
    update_data: Optional[dict] = None  # fields to update in LeadIntake
    show_contact_info: bool = False
    consultation_requested: Optional[bool] = None


def fallback() -> StepResult:
    """Deflect input that does not match the prompt; state stays as is."""
    return StepResult(replies=[BotReply(text=FALLBACK_TEXT)])


class BaseStep(ABC):
    """Abstract base class for all conversation steps.

    Steps are stateless: everything they need is read from the
    ConversationState, everything they change is returned in a StepResult
    and applied by the engine.
    """

    #: Options offered by this step's question; empty for free-text steps
    options: list[str] = []

    @abstractmethod
    async def get_initial_message(self, state: ConversationState) -> Optional[BotReply]:
        """Get the question asked when entering this step (None = nothing to ask)."""
        ...

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        """Process free text typed while this step expects text.

        Args:
            user_message: The message text from the user, already stripped
            state: Current conversation state

        Returns:
            StepResult with replies and optional state changes
        """
        return fallback()

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        """Process a button from this step's choice set.

        Args:
            option: One of the choices of the pending prompt (never "Other")
            state: Current conversation state

        Returns:
            StepResult with replies and optional state changes
        """
        return fallback()
