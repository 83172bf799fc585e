"""API module"""

from .routes import token, voice, callbacks, history, health

__all__ = ["token", "voice", "callbacks", "history", "health"]
