"""Subject step — field of study, free text."""

from src.conversation.steps.base import BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind


class SubjectStep(BaseStep):

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text="What subject or field are you interested in?",
            prompt_kind=PromptKind.TEXT,
        )

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        return StepResult(
            next_step=ConversationStep.LANGUAGE_SCORE,
            update_data={"subject": user_message},
        )
