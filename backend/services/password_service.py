"""Password hashing using bcrypt.

The identity store owns authentication; the hash kept on the user
document is a one-way copy for profile records, never a placeholder.
"""

import bcrypt


class PasswordHashingService:
    """Hash and verify passwords with a configurable bcrypt work factor."""

    def __init__(self, rounds: int = 12):
        self._rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a plaintext password and return the bcrypt hash string."""
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Return True if ``password`` matches ``password_hash``."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            # Invalid hash format
            return False
