"""Attempt State - Estado mutável de uma tentativa em andamento."""

from dataclasses import dataclass, field
from typing import Any

from .enums import AttemptPhase


@dataclass
class AttemptState:
    """Estado completo de uma tentativa (vive apenas em memória).

    Attributes:
        answers: question_id -> texto da alternativa escolhida
        current_question_index: Cursor de navegação (sempre clampado pelo store)
        remaining_time_ms: Tempo restante (None = quiz sem cronômetro)
        initial_time_ms: Capturado no início (ou na retomada) para calcular o tempo gasto
        server_attempt_id: ID da tentativa no servidor após pause/resume
        phase: Fase da máquina de estados
    """

    answers: dict[str, str] = field(default_factory=dict)
    current_question_index: int = 0
    remaining_time_ms: int | None = None
    initial_time_ms: int | None = None
    server_attempt_id: str | None = None
    phase: AttemptPhase = AttemptPhase.LOADING

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionário (logs/debug)."""
        return {
            "answers": dict(self.answers),
            "current_question_index": self.current_question_index,
            "remaining_time_ms": self.remaining_time_ms,
            "initial_time_ms": self.initial_time_ms,
            "server_attempt_id": self.server_attempt_id,
            "phase": self.phase.value,
        }
