"""
Credential hashing and access token services.

- bcrypt with a per-hash salt for credentials
- HS256 JWT signing with a secret injected at construction
- Optional token expiration, UTC timezone consistency
"""

import asyncio
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.errors import HttpError
from app.utils.logger import setup_logger

logger = setup_logger("services.auth")


class AuthServices:
    """Credential hasher backed by bcrypt."""

    salt_rounds = 10

    async def hash(self, value: str) -> str:
        """Hash a plain text credential; runs off the event loop."""
        salt = bcrypt.gensalt(rounds=self.salt_rounds)
        hashed = await asyncio.to_thread(bcrypt.hashpw, value.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    async def compare(self, value: str, digest: str) -> bool:
        """Verify a plain text credential against a stored hash."""
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, value.encode("utf-8"), digest.encode("utf-8")
            )
        except ValueError:
            # Stored value is not a bcrypt hash
            logger.warning("Stored credential is not a valid bcrypt hash")
            return False


class TokenService:
    """Signs and verifies access tokens with an explicitly provided secret."""

    def __init__(
        self,
        secret: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_jwt(self, claims: dict[str, Any]) -> str:
        to_encode = claims.copy()
        if self.expire_minutes:
            to_encode["exp"] = datetime.now(UTC) + timedelta(
                minutes=self.expire_minutes
            )
        return jwt.encode(to_encode, self.secret, algorithm=self.algorithm)

    def verify_jwt_getting_payload(self, token: str) -> dict[str, Any]:
        """Decode ``token``; any invalid, expired or malformed token is a 498."""
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            logger.info(f"Token verification failed: {e}")
            raise HttpError(498, "Invalid Token", "Invalid Token") from e
        if not isinstance(payload, dict):
            raise HttpError(498, "Invalid Token", "Invalid Token")
        return payload
