"""
Registration and login workflows.

Unknown email and wrong password produce the same AuthenticationError so the
response cannot be used to enumerate registered addresses.
"""

import logging
from dataclasses import dataclass
from uuid import uuid4

from ..core.errors import AuthenticationError, AuthorizationError, ConflictError
from ..repositories.store import RecordStore
from ..schemas import UserRecord
from .passwords import PasswordHasher
from .tokens import TokenService, utcnow

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
DEFAULT_USER_TTL = 24 * 3600


@dataclass
class AuthResult:
    token: str
    expires_in: int
    user: UserRecord


class AuthService:
    def __init__(
        self,
        store: RecordStore,
        hasher: PasswordHasher,
        tokens: TokenService,
        user_ttl_seconds: int = DEFAULT_USER_TTL,
    ):
        self.store = store
        self.hasher = hasher
        self.tokens = tokens
        self.user_ttl_seconds = user_ttl_seconds

    def register(self, *, email: str, password: str, full_name: str) -> AuthResult:
        # cheap rejection before paying for a bcrypt hash
        if self.store.user_exists(email):
            raise ConflictError("Email already registered")

        now = utcnow()
        user = UserRecord(
            id=str(uuid4()),
            email=email.lower(),
            hashed_password=self.hasher.hash(password),
            full_name=full_name,
            active=True,
            created_at=now,
            updated_at=now,
        )
        if not self.store.create_user(user, self.user_ttl_seconds):
            # lost a concurrent registration for the same email
            raise ConflictError("Email already registered")

        logger.info("User registered: %s", user.id)
        return AuthResult(token=self.tokens.issue(user.id), expires_in=self.tokens.expires_in, user=user)

    def login(self, *, email: str, password: str) -> AuthResult:
        user = self.store.get_user(email)
        if user is None:
            logger.info("Login failed: unknown account")
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not self.hasher.verify(user.hashed_password, password):
            logger.info("Login failed: bad password for user %s", user.id)
            raise AuthenticationError(INVALID_CREDENTIALS)
        if not user.active:
            logger.info("Login refused: user %s is inactive", user.id)
            raise AuthorizationError("User account is inactive")

        logger.info("User logged in: %s", user.id)
        return AuthResult(token=self.tokens.issue(user.id), expires_in=self.tokens.expires_in, user=user)
