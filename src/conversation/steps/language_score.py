"""Language score step — IELTS/TOEFL/PTE band."""

from src.conversation.steps.base import OTHER_OPTION, BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind

LANGUAGE_SCORE_OPTIONS = [
    "IELTS 6.0-6.5",
    "IELTS 7.0-7.5",
    "IELTS 8.0+",
    "TOEFL 80-90",
    "TOEFL 90-100",
    "TOEFL 100+",
    "PTE 50-60",
    "PTE 60-70",
    "PTE 70+",
    "Not taken yet",
    OTHER_OPTION,
]


class LanguageScoreStep(BaseStep):
    """Score band choice; "Other" accepts a typed score."""

    options = LANGUAGE_SCORE_OPTIONS

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text="Have you taken any language proficiency tests (IELTS/TOEFL/PTE)?",
            prompt_kind=PromptKind.OPTIONS,
            choices=list(self.options),
        )

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        return StepResult(
            next_step=ConversationStep.START_DATE,
            update_data={"language_score": option},
        )

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        return await self.process_option(user_message, state)
