"""
Stateless session tokens: HS256 JWTs carrying only ``sub`` and ``exp``.

There is no revocation list. A token stays valid until it expires.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(self, secret: str, ttl_seconds: int = 3600, clock: Callable[[], datetime] = utcnow):
        if not secret:
            raise ValueError("A signing secret is required")
        self._secret = secret
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock

    @property
    def expires_in(self) -> int:
        return int(self._ttl.total_seconds())

    def issue(self, user_id: str) -> str:
        claims = {"sub": user_id, "exp": self._clock() + self._ttl}
        return jwt.encode(claims, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Optional[str]:
        """Return the subject of a valid token, None for anything else."""
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": ["sub", "exp"], "verify_exp": False},
            )
        except jwt.PyJWTError as exc:
            logger.debug("Token rejected: %s", type(exc).__name__)
            return None
        # expiry is checked here so the injected clock is honoured
        exp = claims["exp"]
        if not isinstance(exp, (int, float)) or exp <= self._clock().timestamp():
            logger.debug("Token rejected: expired")
            return None
        subject = claims["sub"]
        if not isinstance(subject, str) or not subject:
            return None
        return subject
