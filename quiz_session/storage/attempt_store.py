"""Attempt Store - Mutadores restritos sobre o AttemptState.

A durabilidade do progresso parcial fica a cargo do servidor (pause);
este store vive apenas em memória e é descartado no teardown.
"""

from __future__ import annotations

from ..core.exceptions import AttemptLockedError
from ..core.logger import get_logger
from ..models.enums import AttemptPhase
from ..models.schemas import AnswerPayload, Question, Quiz, ResumeSnapshot
from ..models.state import AttemptState

logger = get_logger("attempt_store")


def round_half_up(value: float) -> int:
    """Arredondamento do navegador (Math.round): .5 sobe."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


class AttemptStore:
    """Mantém o quiz (imutável) e o estado da tentativa.

    Example:
        >>> store = AttemptStore(quiz)
        >>> store.seed_fresh()
        >>> store.select_answer("q1", "A")
        >>> store.go_to(99)  # clampado para o último índice
    """

    def __init__(self, quiz: Quiz, state: AttemptState | None = None):
        self.quiz = quiz
        self.state = state or AttemptState()
        self._locked = False

    # -------------------------------------------------------------------------
    # Leitura
    # -------------------------------------------------------------------------

    @property
    def questions(self) -> list[Question]:
        return self.quiz.questions

    @property
    def locked(self) -> bool:
        return self._locked

    def _clamp(self, index: int) -> int:
        last = len(self.questions) - 1
        if last < 0:
            return 0
        return max(0, min(index, last))

    @property
    def current_question_index(self) -> int:
        # Clampado antes de ser observado
        clamped = self._clamp(self.state.current_question_index)
        self.state.current_question_index = clamped
        return clamped

    def current_question(self) -> Question | None:
        if not self.questions:
            return None
        return self.questions[self.current_question_index]

    @property
    def answers(self) -> dict[str, str]:
        return dict(self.state.answers)

    def answer_for(self, question_id: str) -> str | None:
        return self.state.answers.get(question_id)

    def answered_count(self) -> int:
        return len(self.state.answers)

    def is_complete(self) -> bool:
        """Todas as perguntas respondidas (habilita o botão de submit)."""
        return self.answered_count() == len(self.questions)

    def elapsed_ms(self) -> int:
        initial = self.state.initial_time_ms
        remaining = self.state.remaining_time_ms
        if initial is None or remaining is None:
            return 0
        return initial - remaining

    def elapsed_seconds(self) -> int:
        """Tempo gasto em segundos (unidade do contrato de pause/submit)."""
        return round_half_up(self.elapsed_ms() / 1000)

    def answers_payload(self) -> list[AnswerPayload]:
        """Respostas na ordem das perguntas; ids desconhecidos vão ao final."""
        answers = self.state.answers
        ordered = [q.id for q in self.questions if q.id in answers]
        known = set(ordered)
        ordered.extend(qid for qid in answers if qid not in known)
        return [AnswerPayload(question_id=qid, user_answer=answers[qid]) for qid in ordered]

    # -------------------------------------------------------------------------
    # Mutação
    # -------------------------------------------------------------------------

    def _ensure_unlocked(self) -> None:
        if self._locked:
            raise AttemptLockedError(
                "Tentativa finalizada", details={"quiz_id": self.quiz.id}
            )

    def select_answer(self, question_id: str, option_text: str) -> None:
        """Upsert da resposta. Não valida se option_text pertence as alternativas."""
        self._ensure_unlocked()
        self.state.answers[question_id] = option_text

    def go_to(self, index: int) -> int:
        self._ensure_unlocked()
        self.state.current_question_index = self._clamp(index)
        return self.state.current_question_index

    def next_question(self) -> int:
        return self.go_to(self.current_question_index + 1)

    def previous_question(self) -> int:
        return self.go_to(self.current_question_index - 1)

    def set_remaining(self, remaining_ms: int | None) -> None:
        self._ensure_unlocked()
        self.state.remaining_time_ms = remaining_ms

    def set_phase(self, phase: AttemptPhase) -> None:
        self.state.phase = phase

    def seed_fresh(self) -> None:
        """Início do zero: sem respostas, tempo cheio, sem tentativa no servidor."""
        self._ensure_unlocked()
        duration = self.quiz.timer_duration_ms
        self.state.answers = {}
        self.state.current_question_index = 0
        self.state.remaining_time_ms = duration
        self.state.initial_time_ms = duration
        self.state.server_attempt_id = None

    def apply_snapshot(self, snapshot: ResumeSnapshot) -> None:
        """Reconcilia o snapshot pausado com o quiz.

        remaining = max(0, timer - elapsedTime * 1000); elapsedTime vem em segundos.
        """
        self._ensure_unlocked()
        self.state.answers = snapshot.saved_answers()
        self.state.current_question_index = 0

        duration = self.quiz.timer_duration_ms
        if duration is None:
            remaining = None
        else:
            elapsed_ms = round_half_up(snapshot.elapsed_time * 1000)
            remaining = max(0, duration - elapsed_ms)

        self.state.remaining_time_ms = remaining
        self.state.initial_time_ms = remaining
        self.state.server_attempt_id = snapshot.attempt_id
        logger.debug(
            "Snapshot aplicado",
            attempt_id=snapshot.attempt_id,
            answers=len(self.state.answers),
            remaining_ms=remaining,
        )

    def set_server_attempt_id(self, attempt_id: str | None) -> None:
        self.state.server_attempt_id = attempt_id

    def lock(self) -> None:
        """Congela a tentativa (fase TERMINAL)."""
        self._locked = True
