"""Storage - estado em memória da tentativa."""

from .attempt_store import AttemptStore, round_half_up

__all__ = ["AttemptStore", "round_half_up"]
