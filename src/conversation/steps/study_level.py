"""Study level step — degree the student is planning for."""

from src.conversation.steps.base import OTHER_OPTION, BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind

STUDY_LEVEL_OPTIONS = [
    "Bachelor's",
    "Master's",
    "PhD",
    "Diploma or Certification",
    OTHER_OPTION,
]


class StudyLevelStep(BaseStep):
    """Choice of study level; "Other" lets the user type their own."""

    options = STUDY_LEVEL_OPTIONS

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text="Awesome! What level of study are you planning for?",
            prompt_kind=PromptKind.OPTIONS,
            choices=list(self.options),
        )

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        return self._store(option)

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        # Only reachable after "Other": the literal text is the study level
        return self._store(user_message)

    def _store(self, value: str) -> StepResult:
        return StepResult(
            next_step=ConversationStep.DESTINATION,
            update_data={"study_level": value},
        )
