"""Quiz Session Models - Enums, Schemas e State."""

from .enums import AttemptPhase, ErrorKind, QuizStatus, SessionOutcome, SubmitTrigger
from .schemas import (
    AnswerPayload,
    PauseRequest,
    PauseResponse,
    Question,
    Quiz,
    QuizResult,
    ResultAnswer,
    ResultQuiz,
    ResultTopic,
    ResumeSnapshot,
    SnapshotQuestion,
    SubmitRequest,
)
from .state import AttemptState

__all__ = [
    # Enums
    "AttemptPhase",
    "ErrorKind",
    "QuizStatus",
    "SessionOutcome",
    "SubmitTrigger",
    # Schemas
    "Question",
    "Quiz",
    "SnapshotQuestion",
    "ResumeSnapshot",
    "AnswerPayload",
    "PauseRequest",
    "PauseResponse",
    "SubmitRequest",
    "ResultTopic",
    "ResultQuiz",
    "ResultAnswer",
    "QuizResult",
    # State
    "AttemptState",
]
