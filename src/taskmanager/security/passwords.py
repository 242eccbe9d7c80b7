"""Security – bcrypt password hashing."""
from __future__ import annotations

import bcrypt

# bcrypt only reads the first 72 bytes of its input; newer releases reject longer input.
_BCRYPT_MAX_BYTES = 72


def _encode(raw: str) -> bytes:
    return raw.encode("utf-8")[:_BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Hash and verify user passwords; only the hash is ever stored."""

    def __init__(self, rounds: int = 12) -> None:
        # Low rounds for tests; production should use >=12
        self._rounds = rounds

    def hash(self, raw: str) -> str:
        return bcrypt.hashpw(_encode(raw), bcrypt.gensalt(rounds=self._rounds)).decode("ascii")

    def verify(self, raw: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(raw), hashed.encode("ascii"))
        except ValueError:
            # not a bcrypt hash
            return False


__all__ = ["PasswordHasher"]
