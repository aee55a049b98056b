# rehearsal/domains/auth/dependencies.py
import logging
from typing import Optional

import jwt
from fastapi import Depends, Header
from jwt import PyJWKClient
from prisma.models import Profile

from prisma import Prisma
from rehearsal.core.database import get_db
from rehearsal.core.settings import settings
from rehearsal.shared.exceptions import (
    InvalidTokenError,
    UnlinkedProfileError,
    UpstreamFailureError,
)

from .types import AuthJwtPayload

logger = logging.getLogger(__name__)

JWKS_URL = f"{settings.SUPABASE_URL}/auth/v1/jwks" if settings.SUPABASE_URL else None

_jwks_client = PyJWKClient(JWKS_URL) if JWKS_URL else None


def decode_auth_jwt(token: str) -> AuthJwtPayload:
    """
    Verifies a JWT issued by the identity provider.

    Uses JWT_SECRET (HS256) when configured, otherwise the provider's JWKS
    endpoint (RS256).
    """
    if settings.JWT_SECRET:
        try:
            payload = jwt.decode(
                token,
                settings.JWT_SECRET,
                algorithms=["HS256"],
                options={"verify_aud": False},
            )
        except jwt.PyJWTError:
            raise InvalidTokenError("Invalid or expired token")
        return AuthJwtPayload(**dict(payload))

    if not _jwks_client:
        raise UpstreamFailureError("Identity provider not configured")

    try:
        signing_key = _jwks_client.get_signing_key_from_jwt(token).key
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=["RS256"],
            options={"verify_aud": False},
        )
    except jwt.PyJWTError:
        raise InvalidTokenError("Invalid or expired token")
    return AuthJwtPayload(**dict(payload))


def get_auth_id(authorization: Optional[str] = Header(None)) -> str:
    """
    Extracts and validates the bearer JWT from the Authorization header.
    Returns the identity provider's user id (the `sub` claim).
    """
    if not authorization or not authorization.startswith("Bearer "):
        raise InvalidTokenError("Missing token")

    token = authorization.split(" ", 1)[1].strip()
    if not token:
        raise InvalidTokenError("Missing token")

    payload = decode_auth_jwt(token)
    if not payload.sub:
        raise InvalidTokenError("Token has no subject")
    return payload.sub


async def get_current_profile(
    auth_id: str = Depends(get_auth_id), db: Prisma = Depends(get_db)
) -> Profile:
    """
    Finds the linked profile for the authenticated user.
    """
    link = await db.authlink.find_first(
        where={"authId": auth_id},
        include={"profile": True},
    )
    if not link or not link.profile:
        logger.debug(f"No profile linked to auth id {auth_id}")
        raise UnlinkedProfileError()
    return link.profile
