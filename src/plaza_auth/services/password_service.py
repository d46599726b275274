"""bcrypt password hashing for Plaza accounts.

Signup and admin creation hash through ``hash``, which rejects passwords
outside the configured length window with ``WeakPasswordError``. Login
only ever calls ``verify`` and ``needs_rehash``.
"""

import bcrypt

from plaza_auth.exceptions import WeakPasswordError

DEFAULT_MIN_LENGTH = 8
DEFAULT_MAX_LENGTH = 128

# bcrypt reads at most 72 bytes; recent releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHashingService:
    """Hash, check and upgrade account passwords.

    The work factor and length window come from ``Settings``
    (``bcrypt_rounds``, ``password_min_length``, ``password_max_length``).

    >>> service = PasswordHashingService(rounds=4)
    >>> stored = service.hash("secret123")
    >>> service.verify("secret123", stored), service.verify("secret1234", stored)
    (True, False)
    """

    def __init__(
        self,
        rounds: int = 12,
        min_length: int = DEFAULT_MIN_LENGTH,
        max_length: int = DEFAULT_MAX_LENGTH,
    ):
        if not 1 <= min_length <= max_length:
            msg = f"Invalid password length window: {min_length}..{max_length}"
            raise ValueError(msg)
        self._rounds = rounds
        self.min_length = min_length
        self.max_length = max_length

    def hash(self, password: str) -> str:
        """Return a salted bcrypt hash of ``password``.

        Raises
        ------
        WeakPasswordError
            If the password falls outside the length window
        """
        self.validate_strength(password)
        digest = bcrypt.hashpw(_secret_bytes(password), bcrypt.gensalt(self._rounds))
        return digest.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        # A corrupt stored hash is a mismatch, never an error
        try:
            return bcrypt.checkpw(_secret_bytes(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError, AttributeError):
            return False

    def validate_strength(self, password: str) -> None:
        if not password:
            raise WeakPasswordError("password is required")
        if len(password) < self.min_length:
            msg = f"password must be at least {self.min_length} characters"
            raise WeakPasswordError(msg)
        if len(password) > self.max_length:
            msg = f"password must be at most {self.max_length} characters"
            raise WeakPasswordError(msg)

    def needs_rehash(self, password_hash: str) -> bool:
        """True when ``password_hash`` was made with another work factor.

        Unparseable hashes also report True so the next successful login
        replaces them.
        """
        # "$2b$<rounds>$<salt+digest>"
        parts = password_hash.split("$") if password_hash else []
        if len(parts) < 4 or not parts[2].isdigit():
            return True
        return int(parts[2]) != self._rounds
