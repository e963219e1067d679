"""Logger estruturado - contexto via kwargs sobre o logging padrão.

Uso:
    >>> logger = get_logger("controller")
    >>> logger.info("Quiz carregado", quiz_id="abc", questions=10)
    # ... | INFO | quiz_session.controller | Quiz carregado quiz_id=abc questions=10
"""

import logging
from typing import Any

ROOT_LOGGER_NAME = "quiz_session"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


class StructuredLogger:
    """Wrapper fino que aceita contexto como kwargs."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    @staticmethod
    def _format(message: str, context: dict[str, Any]) -> str:
        if not context:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in context.items())
        return f"{message} {pairs}"

    def _log(self, level: int, message: str, /, exc_info: bool = False, **context: Any) -> None:
        if self._logger.isEnabledFor(level):
            self._logger.log(level, self._format(message, context), exc_info=exc_info)

    def debug(self, message: str, /, **context: Any) -> None:
        self._log(logging.DEBUG, message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._log(logging.INFO, message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._log(logging.WARNING, message, **context)

    def error(self, message: str, /, **context: Any) -> None:
        self._log(logging.ERROR, message, **context)

    def exception(self, message: str, /, **context: Any) -> None:
        self._log(logging.ERROR, message, exc_info=True, **context)


def get_logger(name: str) -> StructuredLogger:
    """Retorna logger no namespace quiz_session."""
    return StructuredLogger(logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}"))


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """Configura logging básico e retorna o logger raiz do pacote."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(level)
    return root
