"""Quiz API Client - fronteira HTTP com o backend.

Todas as chamadas passam por ``_request``, que:
- injeta o bearer token do SessionProvider
- aplica o timeout fixo do cliente (ClientConfig.timeout_seconds)
- converte status/erros de transporte em exceções tipadas
"""

from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ..core.config import ClientConfig
from ..core.exceptions import (
    MalformedResponseError,
    QuizNotFoundError,
    TransientNetworkError,
    UnauthorizedError,
)
from ..core.logger import get_logger
from ..models.schemas import (
    PauseRequest,
    PauseResponse,
    Quiz,
    QuizResult,
    ResumeSnapshot,
    SubmitRequest,
)
from .auth import SessionProvider
from .endpoints import QuizEndpoints
from .envelope import is_empty_payload, unwrap_envelope

logger = get_logger("api")

ModelT = TypeVar("ModelT", bound=BaseModel)


class QuizApiClient:
    """Cliente assíncrono da API de quiz.

    Example:
        >>> async with QuizApiClient(provider, ClientConfig.from_env()) as api:
        ...     quiz = await api.get_quiz("abc123")
    """

    def __init__(
        self,
        session_provider: SessionProvider,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Inicializa o cliente.

        Args:
            session_provider: Fonte do token de autenticação
            config: Configuração (padrão: ClientConfig())
            http_client: AsyncClient já configurado (não será fechado por aclose)
            transport: Transporte customizado (testes usam httpx.MockTransport)
        """
        self.session_provider = session_provider
        self.config = config or ClientConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=self.config.api_url,
            timeout=self.config.timeout_seconds,
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    async def __aenter__(self) -> "QuizApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # -------------------------------------------------------------------------
    # Transporte
    # -------------------------------------------------------------------------

    def _auth_headers(self) -> dict[str, str]:
        token = self.session_provider.get_auth_token()
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    @staticmethod
    def _error_message(response: httpx.Response, fallback: str) -> str:
        try:
            data = response.json()
        except ValueError:
            data = None

        if isinstance(data, dict):
            for key in ("error", "details", "message"):
                value = data.get(key)
                if isinstance(value, str) and value:
                    return value

        text = response.text.strip()
        return text or f"{fallback} ({response.status_code})"

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
        fallback_error: str = "Request failed",
    ) -> Any:
        """Executa a requisição e retorna o JSON decodificado (None se vazio)."""
        try:
            response = await self._client.request(
                method, path, json=json, headers=self._auth_headers()
            )
        except httpx.TimeoutException as e:
            logger.warning("Timeout na requisição", method=method, path=path)
            raise TransientNetworkError(
                "Tempo limite excedido", details={"path": path}
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Falha de rede", method=method, path=path, error=str(e))
            raise TransientNetworkError(
                f"{fallback_error}: {e}", details={"path": path}
            ) from e

        status = response.status_code
        logger.debug("Resposta recebida", method=method, path=path, status=status)

        if status == 401:
            raise UnauthorizedError("Não autenticado", status_code=401, details={"path": path})
        if status == 404:
            raise QuizNotFoundError(
                self._error_message(response, "Quiz not found"),
                status_code=404,
                details={"path": path},
            )
        if status >= 400:
            raise TransientNetworkError(
                self._error_message(response, fallback_error),
                status_code=status,
                details={"path": path},
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(
                "Invalid response format from server", status_code=status, details={"path": path}
            ) from e

    @staticmethod
    def _validate(model: type[ModelT], data: dict[str, Any]) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"Resposta sem campos obrigatórios para {model.__name__}",
                details={"errors": e.error_count()},
            ) from e

    # -------------------------------------------------------------------------
    # Operações
    # -------------------------------------------------------------------------

    async def get_quiz(self, quiz_id: str) -> Quiz:
        """GET /api/v1/quiz/{id}."""
        payload = await self._request(
            "GET", QuizEndpoints.get(quiz_id), fallback_error="Failed to get quiz"
        )
        data = unwrap_envelope(payload, keys=("quiz",))
        return self._validate(Quiz, data)

    async def get_resume_snapshot(self, quiz_id: str) -> ResumeSnapshot | None:
        """GET /api/v1/quiz/{id}/resume.

        Returns:
            Snapshot da tentativa pausada, ou None se não houver (404/vazio)
        """
        try:
            payload = await self._request(
                "GET", QuizEndpoints.resume(quiz_id), fallback_error="Failed to get resume state"
            )
        except QuizNotFoundError:
            return None

        if is_empty_payload(payload):
            return None

        data = unwrap_envelope(payload, keys=("attempt", "snapshot"), identity_field="attemptId")
        if data.get("attemptId") is None:
            return None
        return self._validate(ResumeSnapshot, data)

    async def pause_attempt(self, quiz_id: str, request: PauseRequest) -> PauseResponse:
        """POST /api/v1/quiz/{id}/pause."""
        payload = await self._request(
            "POST",
            QuizEndpoints.pause(quiz_id),
            json=request.model_dump(by_alias=True),
            fallback_error="Failed to pause quiz",
        )
        data = unwrap_envelope(payload, keys=("attempt",), identity_field="attemptId")
        return self._validate(PauseResponse, data)

    async def submit_attempt(self, quiz_id: str, request: SubmitRequest) -> Any:
        """POST /api/v1/quiz/{id}/submit. Resposta opaca."""
        return await self._request(
            "POST",
            QuizEndpoints.submit(quiz_id),
            json=request.model_dump(by_alias=True, exclude_none=True),
            fallback_error="Failed to submit quiz",
        )

    async def get_results(self, quiz_id: str) -> QuizResult:
        """GET /api/v1/results/quiz/{id}."""
        payload = await self._request(
            "GET", QuizEndpoints.results(quiz_id), fallback_error="Results not found"
        )
        data = unwrap_envelope(payload, keys=("result",))
        return self._validate(QuizResult, data)
