"""API key authentication.

Clients authenticate with the ``X-API-Key`` header. Any issued key that
still exists is accepted; a missing key and an unknown key are both
401s with the same body shape, and the body never says whether an
unknown key used to exist.
"""

from typing import Optional

import structlog
from fastapi import Header, Request

from apps.api.core.errors import AuthenticationError
from apps.api.domains.keys.registry import ApiKeyRecord, KeyRegistry

logger = structlog.get_logger()

API_KEY_HEADER = "X-API-Key"
MISSING_KEY_MESSAGE = f"Please include {API_KEY_HEADER} header in your request"
INVALID_KEY_MESSAGE = "The provided API key is not valid"


def get_registry(request: Request) -> KeyRegistry:
    """The KeyRegistry owned by the running app."""
    return request.app.state.registry


async def require_api_key(
    request: Request,
    x_api_key: Optional[str] = Header(default=None, alias=API_KEY_HEADER),
) -> ApiKeyRecord:
    """Resolve the X-API-Key header to its registered key record."""
    if not x_api_key:
        raise AuthenticationError("API key is required", MISSING_KEY_MESSAGE)

    record = get_registry(request).validate(x_api_key)
    if record is None:
        logger.info("api_key_rejected", path=request.url.path)
        raise AuthenticationError("Invalid API key", INVALID_KEY_MESSAGE)

    return record
