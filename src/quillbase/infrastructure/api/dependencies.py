"""FastAPI dependencies for API access control.

When ``api_token`` is configured, every collections request must carry it
as a bearer token. Without it the API is open.
"""

import secrets
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status

from quillbase.core.config import get_settings
from quillbase.core.logging import get_logger

logger = get_logger(__name__)


async def require_api_token(
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Check the Authorization header against the configured API token.

    Raises:
        HTTPException: 403 if a token is configured and the header is
            missing, malformed or does not match.
    """
    expected = get_settings().api_token
    if not expected:
        return

    token = ""
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            token = parts[1]

    if not token or not secrets.compare_digest(token, expected):
        logger.info("Access denied: invalid or missing API token")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have permission to manage collections",
        )


ApiAccess = Annotated[None, Depends(require_api_token)]
