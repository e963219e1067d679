"""Quiz Session - Cliente da sessão de tentativa de quiz.

Arquitetura:
- core/: ClientConfig, logger estruturado, exceções
- models/: Enums, Schemas Pydantic do contrato HTTP, AttemptState
- api/: QuizApiClient (httpx), SessionProvider, normalizador de envelope
- storage/: AttemptStore (estado em memória da tentativa)
- engine/: CountdownTimer, SessionController (máquina de estados)
- results/: ResultRenderer
- cli.py: consulta de quiz/resultados pela linha de comando
"""

from .api import AuthStorageSessionProvider, QuizApiClient, SessionProvider, StaticSessionProvider
from .core import ClientConfig, configure_logging, get_logger
from .engine import CountdownTimer, SessionController, SessionErrorInfo
from .models import AttemptPhase, AttemptState, ErrorKind, Quiz, QuizResult, SessionOutcome
from .results import ResultRenderer, format_time
from .storage import AttemptStore

__version__ = "0.1.0"

__all__ = [
    # Config / logging
    "ClientConfig",
    "configure_logging",
    "get_logger",
    # API
    "QuizApiClient",
    "SessionProvider",
    "StaticSessionProvider",
    "AuthStorageSessionProvider",
    # Models
    "AttemptPhase",
    "AttemptState",
    "ErrorKind",
    "SessionOutcome",
    "Quiz",
    "QuizResult",
    # Engine
    "AttemptStore",
    "CountdownTimer",
    "SessionController",
    "SessionErrorInfo",
    # Results
    "ResultRenderer",
    "format_time",
]
