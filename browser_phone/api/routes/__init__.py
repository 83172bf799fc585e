"""API Routes"""

from . import token, voice, callbacks, history, health

__all__ = ["token", "voice", "callbacks", "history", "health"]
