"""Configuração centralizada - carregada de variáveis de ambiente (.env)."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .logger import get_logger

logger = get_logger("config")

DEFAULT_API_URL = "http://localhost:3001"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_TIMER_INTERVAL_MS = 1000
DEFAULT_AUTH_STORAGE = Path.home() / ".quiz_session" / "auth-storage.json"


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning("Valor inválido, usando padrão", var=name, value=raw, default=default)
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Valor inválido, usando padrão", var=name, value=raw, default=default)
        return default


@dataclass
class ClientConfig:
    """Configuração do cliente.

    Attributes:
        api_url: URL base do backend (sem barra final)
        timeout_seconds: Timeout fixo de todas as requisições
        timer_interval_ms: Intervalo entre ticks do cronômetro
        auth_storage_path: Arquivo JSON com o blob de autenticação persistido
        log_level: Nível de log
    """

    api_url: str = DEFAULT_API_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    timer_interval_ms: int = DEFAULT_TIMER_INTERVAL_MS
    auth_storage_path: Path = DEFAULT_AUTH_STORAGE
    log_level: str = "INFO"

    def __post_init__(self):
        self.api_url = self.api_url.rstrip("/")
        self.auth_storage_path = Path(self.auth_storage_path).expanduser()
        if self.timer_interval_ms <= 0:
            self.timer_interval_ms = DEFAULT_TIMER_INTERVAL_MS

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "ClientConfig":
        """Cria configuração a partir das env vars (e do .env, se existir)."""
        if load_env_file:
            load_dotenv()

        return cls(
            api_url=os.getenv("QUIZ_API_URL", DEFAULT_API_URL),
            timeout_seconds=_env_float("QUIZ_API_TIMEOUT", DEFAULT_TIMEOUT_SECONDS),
            timer_interval_ms=_env_int("QUIZ_TIMER_INTERVAL_MS", DEFAULT_TIMER_INTERVAL_MS),
            auth_storage_path=Path(os.getenv("QUIZ_AUTH_STORAGE", str(DEFAULT_AUTH_STORAGE))),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
