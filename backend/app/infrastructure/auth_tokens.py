"""Auth Token Verification — validates bearer JWTs issued by the hosted auth provider.

Invariants:
    - Signature, expiry and audience always verified; no unverified decode path
    - `sub` is required and becomes the auth user id (users.id)
    - Every failure surfaces as AuthenticationError (401), never a raw jwt exception

Design Decisions:
    - Verification only: tokens are issued by the provider, this service never signs
      (ADR: auth platform is out of scope)
    - PyJWT over a provider SDK: one shared secret, no network call per request
"""

import logging
from dataclasses import dataclass

import jwt

from app.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthIdentity:
    """Verified caller identity (may not have a users row yet)."""
    auth_user_id: str
    email: str | None


class TokenVerifier:
    def __init__(self, secret: str, algorithm: str = "HS256", audience: str | None = None):
        self._secret = secret
        self._algorithm = algorithm
        self._audience = audience

    def verify(self, token: str) -> AuthIdentity:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                audience=self._audience,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token expired")
        except jwt.InvalidTokenError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise AuthenticationError("Invalid token")

        email = payload.get("email")
        return AuthIdentity(
            auth_user_id=str(payload["sub"]),
            email=email.strip().lower() if email else None,
        )
