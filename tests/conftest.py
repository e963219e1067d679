# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, fixtures e configurações comuns
# =============================================================================

import os
from functools import partial
from typing import Any, Callable
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
import pytest_asyncio


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "QUIZ_API_URL": "http://test",
        "QUIZ_API_TIMEOUT": "5",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


@pytest.fixture
def config():
    """Configuração de teste (sem ler .env)."""
    from quiz_session.core.config import ClientConfig

    return ClientConfig(api_url="http://test", timeout_seconds=5)


# =============================================================================
# FIXTURES DO LOOP FALSO (TIMER)
# =============================================================================


class FakeHandle:
    def __init__(self, when: float, callback: Callable[[], None]):
        self.when = when
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True


class FakeLoop:
    """Relógio controlado manualmente com a interface time()/call_later()."""

    def __init__(self):
        self.now = 0.0
        self.handles: list[FakeHandle] = []

    def time(self) -> float:
        return self.now

    def call_later(self, delay: float, callback, *args) -> FakeHandle:
        handle = FakeHandle(self.now + delay, partial(callback, *args))
        self.handles.append(handle)
        return handle

    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled and not h.fired]

    def advance(self, seconds: float) -> None:
        """Avanca o relógio disparando os callbacks vencidos em ordem."""
        target = self.now + seconds
        while True:
            due = sorted(
                (h for h in self.pending() if h.when <= target + 1e-9),
                key=lambda h: h.when,
            )
            if not due:
                break
            handle = due[0]
            self.now = handle.when
            handle.fired = True
            handle.callback()
        self.now = target


@pytest.fixture
def fake_loop():
    """Loop falso para dirigir o CountdownTimer."""
    return FakeLoop()


@pytest.fixture
def timer_factory(fake_loop):
    """Factory de timers presos ao loop falso."""
    from quiz_session.engine.timer import CountdownTimer

    return partial(CountdownTimer, loop=fake_loop)


# =============================================================================
# FIXTURES DE DADOS DO QUIZ
# =============================================================================


@pytest.fixture
def two_question_quiz_data() -> dict[str, Any]:
    """Quiz com 2 perguntas e sem cronômetro."""
    return {
        "id": "quiz-1",
        "title": "Fotossintese",
        "difficulty": "EASY",
        "type": "MULTIPLE_CHOICE",
        "timer": None,
        "status": "PENDING",
        "questions": [
            {"id": "q1", "text": "Pergunta 1", "type": "MULTIPLE_CHOICE", "options": ["A", "B"]},
            {"id": "q2", "text": "Pergunta 2", "type": "MULTIPLE_CHOICE", "options": ["C", "D"]},
        ],
    }


@pytest.fixture
def timed_quiz_data(two_question_quiz_data) -> dict[str, Any]:
    """Mesmo quiz com cronômetro de 60s."""
    return {**two_question_quiz_data, "timer": 60000}


@pytest.fixture
def two_question_quiz(two_question_quiz_data):
    from quiz_session.models.schemas import Quiz

    return Quiz.model_validate(two_question_quiz_data)


@pytest.fixture
def timed_quiz(timed_quiz_data):
    from quiz_session.models.schemas import Quiz

    return Quiz.model_validate(timed_quiz_data)


@pytest.fixture
def snapshot_data() -> dict[str, Any]:
    """Snapshot de tentativa pausada com resposta salva em q1."""
    return {
        "attemptId": "attempt-9",
        "status": "PAUSED",
        "elapsedTime": 40,
        "questions": [
            {"id": "q1", "text": "Pergunta 1", "savedAnswer": "B"},
            {"id": "q2", "text": "Pergunta 2"},
        ],
    }


@pytest.fixture
def snapshot(snapshot_data):
    from quiz_session.models.schemas import ResumeSnapshot

    return ResumeSnapshot.model_validate(snapshot_data)


@pytest.fixture
def result_data() -> dict[str, Any]:
    """Resultado pontuado de exemplo."""
    return {
        "id": "result-1",
        "quiz": {
            "id": "quiz-1",
            "title": "Fotossintese",
            "difficulty": "EASY",
            "type": "MULTIPLE_CHOICE",
            "topic": {"id": "topic-1", "name": "Biologia"},
        },
        "score": 50,
        "correctCount": 1,
        "totalQuestions": 2,
        "timeSpent": 75,
        "completedAt": "2026-01-01T10:00:00Z",
        "answers": [
            {
                "questionId": "q1",
                "questionText": "Pergunta 1",
                "userAnswer": "A",
                "correctAnswer": "A",
                "isCorrect": True,
                "explanation": None,
            },
            {
                "questionId": "q2",
                "questionText": "Pergunta 2",
                "userAnswer": "C",
                "correctAnswer": "D",
                "isCorrect": False,
                "explanation": "D é a resposta correta.",
            },
        ],
    }


# =============================================================================
# FIXTURES DE SESSAO / AUTH
# =============================================================================


@pytest.fixture
def session_provider():
    """Provider com token e usuário fixos."""
    from quiz_session.api.auth import StaticSessionProvider

    return StaticSessionProvider(token="token-123", user_id="user-1")


# =============================================================================
# FIXTURES HTTP (httpx.MockTransport)
# =============================================================================


class FakeBackend:
    """Backend falso: rotas (método, path) -> resposta, com registro das chamadas."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status: int = 200, json: Any = None, **kwargs):
        self.routes[(method, path)] = (status, json, kwargs)

    def add_handler(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]):
        self.routes[(method, path)] = handler

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Not found"})
        if callable(route):
            return route(request)
        status, json, kwargs = route
        if json is not None:
            kwargs = {**kwargs, "json": json}
        return httpx.Response(status, **kwargs)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest_asyncio.fixture
async def api(backend, session_provider, config):
    """QuizApiClient apontando para o backend falso."""
    from quiz_session.api.client import QuizApiClient

    client = QuizApiClient(session_provider, config, transport=httpx.MockTransport(backend.handler))
    yield client
    await client.aclose()


# =============================================================================
# FIXTURES DE API MOCKADA (controller)
# =============================================================================


@pytest.fixture
def mock_api(config):
    """Mock do QuizApiClient com métodos assíncronos."""
    mock = MagicMock()
    mock.config = config
    mock.get_quiz = AsyncMock()
    mock.get_resume_snapshot = AsyncMock(return_value=None)
    mock.pause_attempt = AsyncMock()
    mock.submit_attempt = AsyncMock(return_value={"success": True})
    mock.get_results = AsyncMock()
    return mock


@pytest.fixture
def navigate():
    """Callback de navegação registrando as rotas."""
    return MagicMock()
