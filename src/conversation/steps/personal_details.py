"""Personal details steps — collect the student's name and home location."""

from src.conversation.steps.base import BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind


class NameStep(BaseStep):
    """Ask for the full name."""

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text="Great to meet you! What's your full name?",
            prompt_kind=PromptKind.TEXT,
        )

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        return StepResult(
            next_step=ConversationStep.LOCATION,
            update_data={"name": user_message},
        )


class LocationStep(BaseStep):
    """Ask where the student is from, addressing them by name."""

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        name = state.intake.name or "there"
        return BotReply(
            text=f"Thanks, {name}! Where are you from?",
            prompt_kind=PromptKind.TEXT,
        )

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        return StepResult(
            next_step=ConversationStep.STUDY_LEVEL,
            update_data={"location": user_message},
        )
