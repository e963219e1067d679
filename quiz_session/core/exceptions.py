"""Exceções do cliente de sessão de quiz."""

from typing import Any


class QuizSessionError(Exception):
    """Erro base do cliente.

    Attributes:
        message: Mensagem legível (exibida ao usuário quando aplicável)
        details: Contexto adicional para logs
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Erros da fronteira HTTP
# =============================================================================


class ApiError(QuizSessionError):
    """Erro retornado (ou causado) por uma chamada a API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, details)
        self.status_code = status_code


class UnauthorizedError(ApiError):
    """401 - token ausente ou expirado."""


class QuizNotFoundError(ApiError):
    """404 - quiz inexistente."""


class TransientNetworkError(ApiError):
    """Falha de rede, timeout ou status de erro inesperado."""


class MalformedResponseError(TransientNetworkError):
    """Corpo da resposta não é JSON válido ou faltam campos obrigatórios."""


# =============================================================================
# Erros de estado
# =============================================================================


class AttemptLockedError(QuizSessionError):
    """Tentativa já finalizada; mutações não são permitidas."""
