"""Normalizador de envelope de resposta.

O backend não é consistente: o mesmo recurso pode vir como
``{"quiz": {...}}``, ``{"data": {...}}`` ou o objeto direto. Toda
resposta passa por ``unwrap_envelope`` uma única vez, na fronteira HTTP.

Precedência:
    1. Primeira chave de ``keys`` cujo valor é um objeto
    2. O próprio payload, se contém ``identity_field``
    3. ``data``, se for um objeto
    4. O próprio payload
"""

from typing import Any, Iterable

from ..core.exceptions import MalformedResponseError

DATA_KEY = "data"


def unwrap_envelope(
    payload: Any,
    keys: Iterable[str] = (),
    identity_field: str | None = "id",
) -> dict[str, Any]:
    """Extrai o recurso do envelope.

    Args:
        payload: JSON decodificado da resposta
        keys: Chaves preferidas, em ordem (ex: ("quiz",))
        identity_field: Campo que identifica o recurso não-envelopado

    Returns:
        Dicionário do recurso

    Raises:
        MalformedResponseError: Se o payload não for um objeto JSON
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            "Formato de resposta inválido",
            details={"type": type(payload).__name__},
        )

    for key in keys:
        value = payload.get(key)
        if isinstance(value, dict):
            return value

    if identity_field and payload.get(identity_field) is not None:
        return payload

    data = payload.get(DATA_KEY)
    if isinstance(data, dict):
        return data

    return payload


def is_empty_payload(payload: Any) -> bool:
    """True para corpo vazio/nulo (ex: resume sem tentativa pausada)."""
    if payload is None:
        return True
    if isinstance(payload, (dict, list, str)) and len(payload) == 0:
        return True
    return False
