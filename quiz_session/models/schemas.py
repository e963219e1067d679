"""Quiz Schemas - Modelos Pydantic do contrato HTTP.

Os nomes dos campos no JSON seguem o backend (camelCase); os atributos
Python usam snake_case via alias.
"""

from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from .enums import QuizStatus


class WireModel(BaseModel):
    """Base: aceita alias ou nome do atributo e ignora campos extras."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


def _to_str_id(value: Any) -> Any:
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


WireId = Annotated[str, BeforeValidator(_to_str_id)]


# =============================================================================
# Quiz
# =============================================================================


class Question(WireModel):
    """Pergunta do quiz. A ordem de answer_options é preservada como recebida."""

    id: WireId = Field(..., description="ID da pergunta")
    prompt_text: str = Field(..., alias="text", description="Enunciado")
    question_type: str | None = Field(default=None, alias="type")
    answer_options: list[str] = Field(
        default_factory=list, alias="options", description="Alternativas (ordem canônica)"
    )


class Quiz(WireModel):
    """Quiz imutável durante a tentativa."""

    id: WireId
    title: str = ""
    difficulty: str | None = None
    quiz_type: str | None = Field(default=None, alias="type")
    timer_duration_ms: int | None = Field(
        default=None, alias="timer", description="Duração em ms (None = sem cronômetro)"
    )
    status: str | None = None
    questions: list[Question] = Field(default_factory=list)

    @field_validator("timer_duration_ms", mode="before")
    @classmethod
    def _zero_timer_is_untimed(cls, value: Any) -> Any:
        # timer 0/null significa quiz sem cronômetro
        if value in (None, 0, "0", ""):
            return None
        return value

    @field_validator("questions", mode="before")
    @classmethod
    def _null_questions(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_timed(self) -> bool:
        return self.timer_duration_ms is not None

    @property
    def is_completed(self) -> bool:
        return (self.status or "").upper() == QuizStatus.COMPLETED.value


# =============================================================================
# Pause / Resume
# =============================================================================


class SnapshotQuestion(WireModel):
    """Pergunta do snapshot de retomada, com a resposta salva (se houver)."""

    id: WireId
    saved_answer: str | None = Field(default=None, alias="savedAnswer")


class ResumeSnapshot(WireModel):
    """Tentativa pausada mantida pelo servidor."""

    attempt_id: WireId = Field(..., alias="attemptId")
    status: str | None = None
    elapsed_time: float = Field(default=0, alias="elapsedTime", description="Segundos")
    questions: list[SnapshotQuestion] = Field(default_factory=list)

    def saved_answers(self) -> dict[str, str]:
        """Mapeia question_id -> resposta salva."""
        return {
            q.id: q.saved_answer for q in self.questions if q.saved_answer is not None
        }

    @property
    def is_completed(self) -> bool:
        return (self.status or "").upper() == QuizStatus.COMPLETED.value


class AnswerPayload(WireModel):
    question_id: WireId = Field(..., alias="questionId")
    user_answer: str = Field(..., alias="userAnswer")


class PauseRequest(WireModel):
    answers: list[AnswerPayload]
    elapsed_time: int = Field(..., alias="elapsedTime", description="Segundos")


class PauseResponse(WireModel):
    """Confirmação do pause."""

    attempt_id: WireId = Field(..., alias="attemptId")
    status: str | None = None
    elapsed_time: float = Field(default=0, alias="elapsedTime")
    answered_questions: int = Field(default=0, alias="answeredQuestions")
    total_questions: int = Field(default=0, alias="totalQuestions")


class SubmitRequest(WireModel):
    user_id: str | None = Field(default=None, alias="userId")
    answers: list[AnswerPayload]
    time_spent: int = Field(..., alias="timeSpent", description="Segundos")
    attempt_id: str | None = Field(default=None, alias="attemptId")


# =============================================================================
# Resultado
# =============================================================================


class ResultTopic(WireModel):
    id: WireId
    name: str = ""


class ResultQuiz(WireModel):
    id: WireId
    title: str = ""
    difficulty: str | None = None
    quiz_type: str | None = Field(default=None, alias="type")
    topic: ResultTopic | None = None


class ResultAnswer(WireModel):
    question_id: WireId = Field(..., alias="questionId")
    question_text: str = Field(default="", alias="questionText")
    user_answer: str | None = Field(default=None, alias="userAnswer")
    correct_answer: str | None = Field(default=None, alias="correctAnswer")
    is_correct: bool = Field(default=False, alias="isCorrect")
    explanation: str | None = None


class QuizResult(WireModel):
    """Resultado pontuado retornado pelo servidor."""

    id: WireId
    quiz: ResultQuiz | None = None
    score: float = 0
    correct_count: int = Field(default=0, alias="correctCount")
    total_questions: int = Field(default=0, alias="totalQuestions")
    time_spent: float | None = Field(default=None, alias="timeSpent", description="Segundos")
    completed_at: str | None = Field(default=None, alias="completedAt")
    answers: list[ResultAnswer] = Field(default_factory=list)

