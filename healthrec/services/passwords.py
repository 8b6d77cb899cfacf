import logging

import bcrypt

from ..core.errors import HashingError

logger = logging.getLogger(__name__)

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt hashing with a tunable work factor (about tens of ms per hash at 12 rounds)."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        try:
            digest = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds))
        except ValueError as exc:
            logger.warning("Password hashing rejected input: %s", exc)
            raise HashingError("Failed to process password") from exc
        return digest.decode("utf-8")

    def verify(self, digest: str, plaintext: str) -> bool:
        try:
            return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
        except ValueError:
            return False
