"""Greeting step — the widget waits for "Hi" before the intake starts."""

from src.conversation.steps.base import BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep

GREETING_WORDS = ("hi", "hello")

DEFLECTION_TEXT = 'Please say "Hi" to start the conversation 😊'


def is_greeting(user_message: str) -> bool:
    return user_message.strip().lower() in GREETING_WORDS


class GreetingStep(BaseStep):
    """Gate in front of the scripted questions."""

    async def get_initial_message(self, state: ConversationState) -> None:
        # The widget shows its own "say Hi" placeholder while idle
        return None

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        """Start the intake on "hi"/"hello", deflect anything else."""
        if is_greeting(user_message):
            return self.start()
        return StepResult(replies=[BotReply(text=DEFLECTION_TEXT)])

    def start(self) -> StepResult:
        return StepResult(next_step=ConversationStep.NAME)
