"""Countdown Timer - cronômetro regressivo dirigido pelo event loop.

Cada tick é um callback agendado com ``loop.call_later`` (nunca um sleep
bloqueante). Existe no máximo um callback pendente por timer; pause, stop
e dispose cancelam o handle.
"""

import asyncio
from typing import Any, Callable, Protocol

from ..core.logger import get_logger

logger = get_logger("timer")

DEFAULT_INTERVAL_MS = 1000


class LoopLike(Protocol):
    """Subconjunto do AbstractEventLoop usado pelo timer."""

    def time(self) -> float: ...

    def call_later(self, delay: float, callback: Callable[..., Any], *args: Any) -> Any: ...


class CountdownTimer:
    """Cronômetro regressivo com expiração única.

    Attributes:
        remaining_ms: Tempo restante (None antes do start)
        interval_ms: Intervalo nominal entre ticks

    Example:
        >>> timer = CountdownTimer(on_expire=lambda: print("fim"))
        >>> timer.start(60_000)
        >>> timer.pause()
        >>> timer.resume()
    """

    def __init__(
        self,
        on_expire: Callable[[], None] | None = None,
        on_tick: Callable[[int], None] | None = None,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        loop: LoopLike | None = None,
    ):
        self.on_expire = on_expire
        self.on_tick = on_tick
        self.interval_ms = interval_ms
        self._loop = loop
        self.remaining_ms: int | None = None
        self._handle: Any = None
        self._last_tick_at: float | None = None
        self._expired = False
        self._disposed = False

    # -------------------------------------------------------------------------
    # Estado
    # -------------------------------------------------------------------------

    @property
    def running(self) -> bool:
        return self._handle is not None

    @property
    def expired(self) -> bool:
        return self._expired

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _get_loop(self) -> LoopLike:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    # -------------------------------------------------------------------------
    # Controle
    # -------------------------------------------------------------------------

    def start(self, duration_ms: int) -> None:
        """Inicia a contagem. No-op se já estiver rodando."""
        if self._disposed or self.running:
            return

        self.remaining_ms = max(0, int(duration_ms))
        self._expired = False
        self._schedule()
        logger.debug("Timer iniciado", duration_ms=self.remaining_ms)

    def pause(self) -> None:
        """Suspende sem zerar remaining_ms. Idempotente."""
        self._cancel()

    def stop(self) -> None:
        """Para o relógio (usado no submit). Mantém remaining_ms."""
        self._cancel()

    def resume(self) -> None:
        """Retoma a partir de remaining_ms."""
        if self._disposed or self.running or self._expired or self.remaining_ms is None:
            return
        self._schedule()

    def dispose(self) -> None:
        """Cancela o callback pendente e torna o timer inerte."""
        self._cancel()
        self._disposed = True

    # -------------------------------------------------------------------------
    # Agendamento
    # -------------------------------------------------------------------------

    def _schedule(self) -> None:
        loop = self._get_loop()
        self._last_tick_at = loop.time()
        self._handle = loop.call_later(self.interval_ms / 1000, self._on_scheduled_tick)

    def _cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._last_tick_at = None

    def _on_scheduled_tick(self) -> None:
        self._handle = None
        if self._disposed:
            return

        loop = self._get_loop()
        now = loop.time()
        elapsed_ms = self.interval_ms
        if self._last_tick_at is not None:
            elapsed_ms = round((now - self._last_tick_at) * 1000)
        self._last_tick_at = now

        # Próximo tick agendado antes de notificar; pause/expiração nos
        # callbacks cancelam este handle.
        self._handle = loop.call_later(self.interval_ms / 1000, self._on_scheduled_tick)
        self.tick(elapsed_ms)

    def tick(self, elapsed_ms: int | None = None) -> None:
        """Decrementa o tempo restante (piso em 0) e dispara on_expire uma vez."""
        if self._expired or self._disposed or self.remaining_ms is None:
            return

        step = self.interval_ms if elapsed_ms is None else max(0, elapsed_ms)
        self.remaining_ms = max(0, self.remaining_ms - step)

        if self.on_tick:
            self.on_tick(self.remaining_ms)

        if self.remaining_ms == 0:
            self._expired = True
            self._cancel()
            logger.info("Timer expirado")
            if self.on_expire:
                self.on_expire()
