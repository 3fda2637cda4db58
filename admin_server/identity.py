"""
Caller identity for the admin API.
Authentication happens upstream (gateway / SSO proxy); it passes the authenticated
user in a trusted header, and that value is the owner of the caller's resource servers.
"""
import logging

from fastapi import HTTPException, Request, status

from admin_server.config import OWNER_HEADER

logger = logging.getLogger(__name__)


class IdentityResolver:
    def __init__(self, header_name: str = OWNER_HEADER):
        self.header_name = header_name

    def resolve_owner(self, request: Request) -> str | None:
        """Owner string from the request, or None when no identity was established."""
        value = request.headers.get(self.header_name)
        if value is None or not value.strip():
            return None
        return value.strip()


_resolver = IdentityResolver()


def get_owner(request: Request) -> str:
    """Dependency: resolved owner. Raises 401 if the caller has no identity."""
    owner = _resolver.resolve_owner(request)
    if owner is None:
        logger.debug("No caller identity in %s header", _resolver.header_name)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"error": "invalid_request", "error_description": "Caller identity missing"},
        )
    return owner
