"""Engine - cronômetro e máquina de estados da sessão."""

from .controller import SessionController, SessionErrorInfo
from .timer import CountdownTimer

__all__ = ["CountdownTimer", "SessionController", "SessionErrorInfo"]
