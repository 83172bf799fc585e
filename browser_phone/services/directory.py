"""
Client directory
Decides which browser client identity an inbound call rings
"""

from abc import ABC, abstractmethod
from typing import Optional


class ClientDirectory(ABC):
    """Maps an inbound call to a browser client identity"""

    @abstractmethod
    def resolve(self, to_number: Optional[str], from_number: Optional[str]) -> str:
        """Return the client identity that should receive the call"""


class StaticClientDirectory(ClientDirectory):
    """Routes every inbound call to one fixed browser client"""

    def __init__(self, identity: str):
        self.identity = identity

    def resolve(self, to_number: Optional[str], from_number: Optional[str]) -> str:
        return self.identity
