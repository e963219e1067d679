"""Session Controller - máquina de estados de uma tentativa de quiz.

Fluxo:
    LOADING -> (RESUME_PROMPT ->) IN_PROGRESS -> (PAUSING -> IN_PROGRESS)
    IN_PROGRESS -> SUBMITTING -> TERMINAL

Regras:
- Todos os erros são capturados aqui; nenhum sobe para a camada de view.
- Respostas assíncronas que chegam após ``close()`` são descartadas.
- Submit é single-flight: enquanto SUBMITTING, novos gatilhos (inclusive
  expiração do timer) são ignorados.
- O pause congela o relógio antes da resposta do servidor; o servidor só
  garante a durabilidade das respostas.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

from ..api.auth import SessionProvider
from ..api.client import QuizApiClient
from ..api.endpoints import results_page
from ..core.config import ClientConfig
from ..core.exceptions import ApiError, QuizNotFoundError, UnauthorizedError
from ..core.logger import get_logger
from ..models.enums import AttemptPhase, ErrorKind, SessionOutcome, SubmitTrigger
from ..models.schemas import PauseRequest, PauseResponse, Quiz, ResumeSnapshot, SubmitRequest
from ..results.renderer import format_time
from ..storage.attempt_store import AttemptStore
from .timer import CountdownTimer

logger = get_logger("controller")

EMPTY_QUIZ_MESSAGE = "This quiz has no questions available. Please try again later."

# Fases em que o usuário pode responder e navegar
EDITABLE_PHASES = (AttemptPhase.IN_PROGRESS, AttemptPhase.PAUSING)


@dataclass
class SessionErrorInfo:
    """Erro exibido ao usuário (inline, descartável)."""

    kind: ErrorKind
    message: str


class SessionController:
    """Orquestra fetch -> retomada -> respostas -> pause/submit -> resultados.

    Uma instância por aba/tentativa. Colaboradores externos:
        - api: QuizApiClient (HTTP)
        - session_provider: token, user id e reação a 401
        - navigate: callback de navegação (rota de resultados)

    Example:
        >>> controller = SessionController("abc", api, provider, navigate=router.push)
        >>> await controller.load()
        >>> controller.select_answer("q1", "A")
        >>> await controller.submit()
    """

    def __init__(
        self,
        quiz_id: str,
        api: QuizApiClient,
        session_provider: SessionProvider,
        navigate: Callable[[str], None] | None = None,
        config: ClientConfig | None = None,
        timer_factory: Callable[..., CountdownTimer] | None = None,
        on_change: Callable[[SessionController], None] | None = None,
    ):
        self.quiz_id = quiz_id
        self.api = api
        self.session_provider = session_provider
        self.config = config or getattr(api, "config", None) or ClientConfig()
        self._navigate = navigate
        self._timer_factory = timer_factory or CountdownTimer
        self._on_change = on_change

        self._phase = AttemptPhase.LOADING
        self._alive = True
        self._loading = False
        self._tasks: set[asyncio.Future[Any]] = set()

        self.outcome: SessionOutcome | None = None
        self.error: SessionErrorInfo | None = None
        self.quiz: Quiz | None = None
        self.store: AttemptStore | None = None
        self.snapshot: ResumeSnapshot | None = None
        self.last_pause: PauseResponse | None = None
        self.timer: CountdownTimer | None = None

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def phase(self) -> AttemptPhase:
        return self._phase

    @property
    def alive(self) -> bool:
        return self._alive

    @property
    def server_attempt_id(self) -> str | None:
        return self.store.state.server_attempt_id if self.store else None

    @property
    def remaining_time_ms(self) -> int | None:
        return self.store.state.remaining_time_ms if self.store else None

    @property
    def formatted_time_remaining(self) -> str | None:
        remaining = self.remaining_time_ms
        return format_time(remaining) if remaining is not None else None

    @property
    def can_submit(self) -> bool:
        """Botão de submit habilitado (todas respondidas, sem submit em voo)."""
        return (
            self._phase == AttemptPhase.IN_PROGRESS
            and self.store is not None
            and self.store.is_complete()
        )

    # =========================================================================
    # Transições internas
    # =========================================================================

    def _set_phase(self, phase: AttemptPhase) -> None:
        previous = self._phase
        self._phase = phase
        if self.store:
            self.store.set_phase(phase)
        logger.debug(
            "Transição de fase", quiz_id=self.quiz_id, de=previous.value, para=phase.value
        )
        if self._on_change:
            self._on_change(self)

    def _surface(self, kind: ErrorKind, message: str) -> None:
        self.error = SessionErrorInfo(kind=kind, message=message)
        logger.warning("Erro exibido", quiz_id=self.quiz_id, kind=kind.value, message=message)

    def _go(self, path: str) -> None:
        if self._navigate:
            self._navigate(path)
        else:
            logger.info("Navegação sem handler", path=path)

    def _finish(self, outcome: SessionOutcome) -> None:
        """Transição única para TERMINAL."""
        if self._phase == AttemptPhase.TERMINAL:
            return
        self.outcome = outcome
        if self.timer:
            self.timer.dispose()
        if self.store:
            self.store.lock()
        self._set_phase(AttemptPhase.TERMINAL)
        logger.info("Sessão finalizada", quiz_id=self.quiz_id, outcome=outcome.value)
        if self.store:
            logger.debug("Estado final", quiz_id=self.quiz_id, **self.store.state.to_dict())

    def _handle_unauthorized(self) -> None:
        """401: teardown completo e redirecionamento para login (via provider)."""
        self._surface(ErrorKind.UNAUTHENTICATED, "Session expired. Please sign in again.")
        self._finish(SessionOutcome.UNAUTHENTICATED)
        self.close()
        self.session_provider.on_unauthorized()

    def _discarded(self, operation: str) -> bool:
        if not self._alive:
            logger.debug("Resultado descartado após teardown", quiz_id=self.quiz_id, op=operation)
            return True
        return False

    # =========================================================================
    # LOADING
    # =========================================================================

    async def load(self) -> None:
        """Busca quiz e snapshot de retomada em paralelo e decide a próxima fase.

        Single-flight: chamadas concorrentes enquanto um load está em voo são
        ignoradas.
        """
        if not self._alive or self._phase != AttemptPhase.LOADING:
            return
        if self._loading:
            logger.debug("Load ignorado, já em andamento", quiz_id=self.quiz_id)
            return

        self._loading = True
        try:
            await self._load()
        finally:
            self._loading = False

    async def _load(self) -> None:
        self.error = None
        quiz_result, snapshot_result = await asyncio.gather(
            self.api.get_quiz(self.quiz_id),
            self.api.get_resume_snapshot(self.quiz_id),
            return_exceptions=True,
        )
        if self._discarded("load"):
            return
        if self._phase != AttemptPhase.LOADING:
            logger.debug("Resultado de load descartado", quiz_id=self.quiz_id, phase=self._phase.value)
            return

        for result in (quiz_result, snapshot_result):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result

        if isinstance(quiz_result, UnauthorizedError) or isinstance(
            snapshot_result, UnauthorizedError
        ):
            self._handle_unauthorized()
            return

        if isinstance(quiz_result, QuizNotFoundError):
            self._surface(ErrorKind.NOT_FOUND, quiz_result.message or "Quiz not found")
            self._finish(SessionOutcome.NOT_FOUND)
            return

        if isinstance(quiz_result, Exception):
            if isinstance(quiz_result, ApiError):
                message = quiz_result.message
            else:
                logger.exception("Erro inesperado ao carregar quiz", quiz_id=self.quiz_id)
                message = "Failed to load quiz"
            # Permanece em LOADING; load() pode ser chamado de novo
            self._surface(ErrorKind.LOAD_FAILED, message)
            if self._on_change:
                self._on_change(self)
            return

        quiz: Quiz = quiz_result
        self.quiz = quiz

        if quiz.is_completed:
            logger.info("Quiz já concluído, redirecionando", quiz_id=self.quiz_id)
            self._finish(SessionOutcome.ALREADY_COMPLETED)
            self._go(results_page(self.quiz_id))
            return

        if not quiz.questions:
            self._surface(ErrorKind.EMPTY_QUIZ, EMPTY_QUIZ_MESSAGE)
            self._finish(SessionOutcome.EMPTY_QUIZ)
            return

        self.store = AttemptStore(quiz)

        snapshot: ResumeSnapshot | None = None
        if isinstance(snapshot_result, Exception):
            # Falha no resume não bloqueia a tentativa; apenas log
            logger.warning(
                "Falha ao buscar snapshot, iniciando do zero",
                quiz_id=self.quiz_id,
                error=str(snapshot_result),
            )
        elif snapshot_result is not None and not snapshot_result.is_completed:
            snapshot = snapshot_result

        logger.info(
            "Quiz carregado",
            quiz_id=self.quiz_id,
            questions=len(quiz.questions),
            timed=quiz.is_timed,
            has_snapshot=snapshot is not None,
        )

        if snapshot is not None:
            self.snapshot = snapshot
            self._set_phase(AttemptPhase.RESUME_PROMPT)
            return

        self.store.seed_fresh()
        self._begin_attempt()

    def _begin_attempt(self) -> None:
        """Entra em IN_PROGRESS e inicia o timer (se o quiz for cronometrado)."""
        self._set_phase(AttemptPhase.IN_PROGRESS)

        remaining = self.store.state.remaining_time_ms
        if remaining is None:
            return

        if self.timer is None:
            self.timer = self._timer_factory(
                on_expire=self._on_timer_expire,
                on_tick=self._on_timer_tick,
                interval_ms=self.config.timer_interval_ms,
            )
        self.timer.start(remaining)

    # =========================================================================
    # RESUME_PROMPT
    # =========================================================================

    def choose_resume(self) -> bool:
        """Retoma a tentativa pausada com as respostas e o tempo do servidor."""
        if not self._alive or self._phase != AttemptPhase.RESUME_PROMPT or not self.snapshot:
            return False

        self.store.apply_snapshot(self.snapshot)
        self.snapshot = None
        logger.info(
            "Tentativa retomada",
            quiz_id=self.quiz_id,
            attempt_id=self.store.state.server_attempt_id,
            remaining_ms=self.store.state.remaining_time_ms,
        )
        self._begin_attempt()
        return True

    def choose_fresh(self) -> bool:
        """Descarta o snapshot e começa do zero."""
        if not self._alive or self._phase != AttemptPhase.RESUME_PROMPT:
            return False

        self.snapshot = None
        self.store.seed_fresh()
        logger.info("Tentativa reiniciada do zero", quiz_id=self.quiz_id)
        self._begin_attempt()
        return True

    # =========================================================================
    # IN_PROGRESS - ações do usuário
    # =========================================================================

    def select_answer(self, question_id: str, option_text: str) -> bool:
        if not self._alive or self._phase not in EDITABLE_PHASES:
            return False
        self.store.select_answer(question_id, option_text)
        return True

    def go_to(self, index: int) -> bool:
        if not self._alive or self._phase not in EDITABLE_PHASES:
            return False
        self.store.go_to(index)
        return True

    def next_question(self) -> bool:
        if not self._alive or self._phase not in EDITABLE_PHASES:
            return False
        self.store.next_question()
        return True

    def previous_question(self) -> bool:
        if not self._alive or self._phase not in EDITABLE_PHASES:
            return False
        self.store.previous_question()
        return True

    def dismiss_error(self) -> None:
        self.error = None

    # =========================================================================
    # Timer
    # =========================================================================

    def _on_timer_tick(self, remaining_ms: int) -> None:
        if self._alive and self.store and not self.store.locked:
            self.store.set_remaining(remaining_ms)

    def _on_timer_expire(self) -> None:
        if not self._alive or self._phase != AttemptPhase.IN_PROGRESS:
            return
        logger.info("Tempo esgotado, enviando automaticamente", quiz_id=self.quiz_id)
        task = asyncio.ensure_future(self.submit(trigger=SubmitTrigger.EXPIRY))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    # =========================================================================
    # PAUSING
    # =========================================================================

    async def pause(self) -> bool:
        """Pausa a tentativa no servidor.

        O timer para imediatamente (otimista). Em sucesso permanece parado;
        em falha volta a correr.

        Returns:
            True se o servidor confirmou o pause
        """
        if not self._alive or self._phase != AttemptPhase.IN_PROGRESS:
            return False

        clock_was_running = self.timer is not None and self.timer.running
        self._set_phase(AttemptPhase.PAUSING)
        if self.timer:
            self.timer.pause()

        request = PauseRequest(
            answers=self.store.answers_payload(),
            elapsed_time=self.store.elapsed_seconds(),
        )

        try:
            response = await self.api.pause_attempt(self.quiz_id, request)
        except UnauthorizedError:
            if not self._discarded("pause"):
                self._handle_unauthorized()
            return False
        except Exception as e:
            if self._discarded("pause"):
                return False
            if isinstance(e, ApiError):
                message = e.message
            else:
                logger.exception("Erro inesperado no pause", quiz_id=self.quiz_id)
                message = "Failed to pause quiz"
            self._surface(ErrorKind.PAUSE_FAILED, message)
            self._set_phase(AttemptPhase.IN_PROGRESS)
            if clock_was_running:
                self.timer.resume()
            return False

        if self._discarded("pause"):
            return False

        self.store.set_server_attempt_id(response.attempt_id)
        self.last_pause = response
        self.error = None
        logger.info(
            "Tentativa pausada",
            quiz_id=self.quiz_id,
            attempt_id=response.attempt_id,
            answered=response.answered_questions,
            total=response.total_questions,
        )
        self._set_phase(AttemptPhase.IN_PROGRESS)
        return True

    # =========================================================================
    # SUBMITTING
    # =========================================================================

    async def submit(self, trigger: SubmitTrigger = SubmitTrigger.MANUAL) -> bool:
        """Envia as respostas. Single-flight: gatilhos concorrentes são ignorados.

        Returns:
            True se o servidor aceitou (sessão em TERMINAL)
        """
        if not self._alive:
            return False
        if self._phase == AttemptPhase.SUBMITTING:
            logger.info("Submit ignorado, já em andamento", quiz_id=self.quiz_id, trigger=trigger.value)
            return False
        if self._phase != AttemptPhase.IN_PROGRESS:
            return False

        clock_was_running = self.timer is not None and self.timer.running
        self._set_phase(AttemptPhase.SUBMITTING)
        if self.timer:
            self.timer.stop()

        request = SubmitRequest(
            user_id=self.session_provider.get_user_id(),
            answers=self.store.answers_payload(),
            time_spent=self.store.elapsed_seconds(),
            attempt_id=self.store.state.server_attempt_id,
        )
        logger.info(
            "Enviando respostas",
            quiz_id=self.quiz_id,
            trigger=trigger.value,
            answers=len(request.answers),
            time_spent=request.time_spent,
        )

        try:
            await self.api.submit_attempt(self.quiz_id, request)
        except UnauthorizedError:
            if not self._discarded("submit"):
                self._handle_unauthorized()
            return False
        except Exception as e:
            if self._discarded("submit"):
                return False
            if isinstance(e, ApiError):
                message = e.message
            else:
                logger.exception("Erro inesperado no submit", quiz_id=self.quiz_id)
                message = "Failed to submit quiz"
            self._surface(ErrorKind.SUBMIT_FAILED, message)
            self._set_phase(AttemptPhase.IN_PROGRESS)
            # Após falha de submit por expiração o timer fica parado
            if trigger == SubmitTrigger.MANUAL and clock_was_running:
                self.timer.resume()
            return False

        if self._discarded("submit"):
            return False

        self.error = None
        self._finish(SessionOutcome.SUBMITTED)
        self._go(results_page(self.quiz_id))
        return True

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """Desmonta a sessão: libera o timer e descarta resultados futuros."""
        if not self._alive:
            return
        self._alive = False
        if self.timer:
            self.timer.dispose()
        logger.debug("Sessão desmontada", quiz_id=self.quiz_id, phase=self._phase.value)
