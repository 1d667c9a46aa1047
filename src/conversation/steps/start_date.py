"""Start date step — when the student plans to begin."""

from src.conversation.steps.base import BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind

START_DATE_OPTIONS = [
    "Next 3 months",
    "3-6 months",
    "6-12 months",
    "Next year",
    "Not decided yet",
]

THANK_YOU_TEXT = (
    "Thank you for sharing your details! Our education experts will review "
    "your preferences and get in touch shortly. You're one step closer to "
    "studying abroad!"
)


class StartDateStep(BaseStep):

    options = START_DATE_OPTIONS

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text=(
                "Perfect! One last question — when are you planning to start "
                "your studies abroad?"
            ),
            prompt_kind=PromptKind.OPTIONS,
            choices=list(self.options),
        )

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        """Store the timeframe and thank the user before the booking offer."""
        return StepResult(
            replies=[BotReply(text=THANK_YOU_TEXT)],
            next_step=ConversationStep.CONSULTATION,
            update_data={"start_date": option},
        )
