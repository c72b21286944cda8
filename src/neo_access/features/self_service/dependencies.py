"""
FastAPI dependencies for the self-service endpoints.

Authenticating a caller is not done here. An ``IdentityResolver`` turns a
request that something upstream has already authenticated into a ``UserId``.
The default resolver trusts a header set by the gateway in front of this
service.
"""

from typing import Optional, Protocol, runtime_checkable

from fastapi import Request
from loguru import logger

from ...config.settings import AccessSettings
from ...core.exceptions import AuthenticationError, MalformedIdentifierError
from ...core.value_objects import UserId
from ...services import AccessServices


@runtime_checkable
class IdentityResolver(Protocol):
    """Resolves the authenticated principal of a request."""

    async def resolve(self, request: Request) -> Optional[UserId]:
        """Return the caller's user id, or None if the request is anonymous."""
        ...


class HeaderIdentityResolver:
    """Reads the caller's user id from a trusted request header."""

    def __init__(self, header_name: str = "X-Authenticated-User"):
        self.header_name = header_name

    async def resolve(self, request: Request) -> Optional[UserId]:
        raw = request.headers.get(self.header_name)
        if raw is None or not raw.strip():
            return None
        try:
            return UserId.parse(raw.strip())
        except MalformedIdentifierError as e:
            logger.warning(f"Rejected malformed {self.header_name} header")
            raise AuthenticationError("Caller identity is malformed") from e


def get_services(request: Request) -> AccessServices:
    """The services built for this application instance."""
    return request.app.state.services


def get_settings_dependency(request: Request) -> AccessSettings:
    return request.app.state.settings


async def get_current_user_id(request: Request) -> UserId:
    """The authenticated caller, or 401."""
    resolver: IdentityResolver = request.app.state.identity_resolver
    user_id = await resolver.resolve(request)
    if user_id is None:
        raise AuthenticationError("Authentication required")
    return user_id
