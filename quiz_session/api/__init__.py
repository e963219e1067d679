"""API - cliente HTTP, autenticação e normalização de respostas."""

from .auth import AuthStorageSessionProvider, SessionProvider, StaticSessionProvider
from .client import QuizApiClient
from .endpoints import LOGIN_PAGE, QuizEndpoints, results_page
from .envelope import is_empty_payload, unwrap_envelope

__all__ = [
    "QuizApiClient",
    "SessionProvider",
    "StaticSessionProvider",
    "AuthStorageSessionProvider",
    "QuizEndpoints",
    "results_page",
    "LOGIN_PAGE",
    "unwrap_envelope",
    "is_empty_payload",
]
