"""
bcrypt password encoder - Implements PasswordEncoder protocol.

bcrypt only reads the first 72 bytes of its input. Longer passwords are
rejected instead of being silently truncated (bcrypt >= 5 raises on them).
"""

import bcrypt

MIN_ROUNDS = 10
MAX_PASSWORD_BYTES = 72


class BcryptPasswordEncoder:
    """
    Implements PasswordEncoder protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = MIN_ROUNDS) -> None:
        if rounds < MIN_ROUNDS:
            raise ValueError(f"bcrypt cost factor must be >= {MIN_ROUNDS}, got {rounds}")
        self._rounds = rounds

    def encode(self, plaintext: str) -> str:
        """Hash a password; raises ValueError above MAX_PASSWORD_BYTES."""
        password = plaintext.encode("utf-8")
        if len(password) > MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {MAX_PASSWORD_BYTES} bytes, got {len(password)}")
        return bcrypt.hashpw(password, bcrypt.gensalt(rounds=self._rounds)).decode()

    def matches(self, plaintext: str, password_hash: str) -> bool:
        """Constant-time check of a password against a stored hash."""
        return bcrypt.checkpw(plaintext.encode(), password_hash.encode())
