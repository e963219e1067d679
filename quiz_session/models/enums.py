"""Enums - Fases da tentativa, status do quiz e desfechos."""

from enum import Enum


class AttemptPhase(str, Enum):
    """Fases da máquina de estados da sessão."""

    LOADING = "loading"  # Buscando quiz + snapshot
    RESUME_PROMPT = "resume_prompt"  # Usuário escolhe retomar ou recomeçar
    IN_PROGRESS = "in_progress"
    PAUSING = "pausing"  # Pause enviado, aguardando servidor
    SUBMITTING = "submitting"  # Submit em voo (latch single-flight)
    TERMINAL = "terminal"


class QuizStatus(str, Enum):
    """Status do quiz no servidor."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class SessionOutcome(str, Enum):
    """Como a sessão chegou ao estado TERMINAL."""

    SUBMITTED = "submitted"
    ALREADY_COMPLETED = "already_completed"
    NOT_FOUND = "not_found"
    EMPTY_QUIZ = "empty_quiz"
    UNAUTHENTICATED = "unauthenticated"


class SubmitTrigger(str, Enum):
    """Origem do submit."""

    MANUAL = "manual"
    EXPIRY = "expiry"


class ErrorKind(str, Enum):
    """Erros exibidos ao usuário."""

    NOT_FOUND = "not_found"
    EMPTY_QUIZ = "empty_quiz"
    LOAD_FAILED = "load_failed"
    PAUSE_FAILED = "pause_failed"
    SUBMIT_FAILED = "submit_failed"
    UNAUTHENTICATED = "unauthenticated"
