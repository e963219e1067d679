"""Session Provider - acesso ao token de autenticação.

O controller nunca le o armazenamento de auth diretamente; recebe um
``SessionProvider`` injetado.
"""

import json
from pathlib import Path
from typing import Any, Callable, Protocol, runtime_checkable

from ..core.logger import get_logger
from .endpoints import LOGIN_PAGE

logger = get_logger("auth")


@runtime_checkable
class SessionProvider(Protocol):
    """Contrato mínimo de sessão autenticada."""

    def get_auth_token(self) -> str | None: ...

    def get_user_id(self) -> str | None: ...

    def on_unauthorized(self) -> None: ...


class StaticSessionProvider:
    """Provider em memória (token fixo)."""

    def __init__(
        self,
        token: str | None = None,
        user_id: str | None = None,
        on_logout: Callable[[], None] | None = None,
    ):
        self.token = token
        self.user_id = user_id
        self._on_logout = on_logout
        self.unauthorized_count = 0

    def get_auth_token(self) -> str | None:
        return self.token

    def get_user_id(self) -> str | None:
        return self.user_id

    def on_unauthorized(self) -> None:
        self.unauthorized_count += 1
        self.token = None
        if self._on_logout:
            self._on_logout()


class AuthStorageSessionProvider:
    """Le o blob de auth persistido em disco.

    Formato do arquivo (mesmo do store persistido no navegador):
        {"state": {"session": {"access_token": "..."}, "user": {"id": "..."}}}

    Em 401 o blob é removido e o hook de redirecionamento é chamado com a
    rota de login.
    """

    def __init__(
        self,
        storage_path: str | Path,
        redirect: Callable[[str], None] | None = None,
    ):
        self.storage_path = Path(storage_path).expanduser()
        self._redirect = redirect

    def _read_state(self) -> dict[str, Any]:
        try:
            raw = self.storage_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            logger.warning("Falha ao ler auth storage", path=str(self.storage_path), error=str(e))
            return {}

        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Auth storage corrompido", path=str(self.storage_path))
            return {}

        if not isinstance(parsed, dict):
            return {}
        state = parsed.get("state")
        return state if isinstance(state, dict) else {}

    def get_auth_token(self) -> str | None:
        session = self._read_state().get("session")
        if isinstance(session, dict):
            return session.get("access_token") or None
        return None

    def get_user_id(self) -> str | None:
        user = self._read_state().get("user")
        if isinstance(user, dict) and user.get("id") is not None:
            return str(user["id"])
        return None

    def on_unauthorized(self) -> None:
        logger.warning("Sessão expirada, removendo auth storage", path=str(self.storage_path))
        try:
            self.storage_path.unlink()
        except FileNotFoundError:
            pass
        if self._redirect:
            self._redirect(LOGIN_PAGE)
