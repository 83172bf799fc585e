"""
Authentication Middleware
Pluggable authorization check for caller-facing endpoints
"""

import hmac
from abc import ABC, abstractmethod
from typing import Optional, List
from fastapi import Request

from browser_phone.core.logging import get_logger
from browser_phone.core.exceptions import AuthenticationError

logger = get_logger(__name__)


async def get_api_key(request: Request) -> Optional[str]:
    """Extract API key from request"""
    # Try header first
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return api_key

    # Try query parameter
    api_key = request.query_params.get("api_key")
    if api_key:
        return api_key

    # Try Authorization header (Bearer token)
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]

    return None


class Authorizer(ABC):
    """Decides whether a request may reach a caller-facing endpoint"""

    @property
    def enabled(self) -> bool:
        return True

    @abstractmethod
    async def authorize(self, request: Request) -> None:
        """Return normally to allow the request, raise AuthenticationError to reject it"""


class ApiKeyAuthorizer(Authorizer):
    """
    Accepts requests carrying one of the configured API keys

    With no keys configured every request is allowed.
    """

    def __init__(self, api_keys: List[str]):
        self.api_keys = list(api_keys)

    @property
    def enabled(self) -> bool:
        return bool(self.api_keys)

    async def authorize(self, request: Request) -> None:
        if not self.api_keys:
            return

        api_key = await get_api_key(request)
        if not api_key:
            raise AuthenticationError("API key is required")

        if not any(hmac.compare_digest(api_key, known) for known in self.api_keys):
            logger.warning(f"Rejected API key for {request.url.path}")
            raise AuthenticationError("Invalid API key")

        request.state.api_key = api_key


async def require_client_auth(request: Request) -> None:
    """
    Dependency guarding caller-facing endpoints

    Usage:
        @router.get("/endpoint", dependencies=[Depends(require_client_auth)])
        async def endpoint():
            ...
    """
    authorizer: Authorizer = request.app.state.authorizer
    await authorizer.authorize(request)
