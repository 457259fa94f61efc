"""
FastAPI dependencies for authentication and authorization.

Tokens are verified from the claims alone; no database lookup happens on
protected requests.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from jobly.core.security import decode_token

logger = logging.getLogger(__name__)

# HTTP Bearer token scheme (Authorization: Bearer <token>)
# auto_error=False so anonymous requests reach public routes
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Could not validate credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_optional_claims(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[dict]:
    """
    Return the verified token claims, or None when no token was sent.

    Raises:
        HTTPException 401: If a token was sent but fails verification
    """
    if credentials is None:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        logger.warning("Rejected invalid bearer token")
        raise _unauthorized()

    if not payload.get("username"):
        raise _unauthorized()

    return payload


async def get_current_claims(
    claims: Optional[dict] = Depends(get_optional_claims),
) -> dict:
    """
    Require a logged-in caller.

    Raises:
        HTTPException 401: If no valid token was supplied
    """
    if claims is None:
        raise _unauthorized("Not authenticated")
    return claims


async def get_admin_claims(
    claims: dict = Depends(get_current_claims),
) -> dict:
    """
    Require a logged-in admin.

    Raises:
        HTTPException 401: If no valid token was supplied
        HTTPException 403: If the caller is not an admin
    """
    if claims.get("isAdmin") is not True:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required"
        )
    return claims
