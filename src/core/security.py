"""Password hashing and verification (bcrypt, salted)."""
import bcrypt


# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """One-way salted password hashing with a configurable bcrypt work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        # Verified against when a signin email matches no user
        self.dummy_hash = self.hash("not-a-real-password")

    def hash(self, password: str) -> str:
        """Hash a password with a freshly generated salt."""
        return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=self.rounds)).decode()

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored bcrypt hash.

        bcrypt.checkpw compares in constant time. A malformed stored hash or an
        over-long password is treated as a mismatch rather than an error.
        """
        try:
            return bcrypt.checkpw(password.encode(), password_hash.encode())
        except ValueError:
            return False
