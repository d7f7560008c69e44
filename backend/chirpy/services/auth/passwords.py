"""One-way password hashing built on Werkzeug's security helpers."""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

from chirpy.services._shared.errors import HashingError

DEFAULT_METHOD = "scrypt"
KNOWN_METHODS = frozenset({"scrypt", "pbkdf2"})


class PasswordHasher:
    """
    Salted one-way hashing and constant-time verification of passwords.

    Stored hashes use Werkzeug's ``method$salt$digest`` layout. No password
    policy is enforced here; weak passwords hash like any other.
    """

    def __init__(self, method: str = DEFAULT_METHOD, salt_length: int = 16) -> None:
        self.method = method
        self.salt_length = salt_length

    def hash(self, plaintext: str) -> str:
        """
        Hash ``plaintext`` with a fresh random salt.

        :raises HashingError: If the underlying KDF fails.
        """
        try:
            return generate_password_hash(
                plaintext, method=self.method, salt_length=self.salt_length
            )
        except (TypeError, ValueError) as exc:
            raise HashingError("Password hashing failed") from exc

    def verify(self, plaintext: str, hashed: str) -> bool:
        """
        Return ``True`` when ``plaintext`` matches ``hashed``.

        A mismatch is ``False``, not an error. Werkzeug compares digests with
        :func:`hmac.compare_digest`.

        :raises HashingError: If ``hashed`` is not a ``method$salt$digest`` string
            or names an unknown method.
        """
        if not isinstance(hashed, str):
            raise HashingError("Stored password hash is malformed")
        parts = hashed.split("$", 2)
        if len(parts) != 3 or not all(parts):
            raise HashingError("Stored password hash is malformed")
        if parts[0].split(":", 1)[0] not in KNOWN_METHODS:
            raise HashingError("Stored password hash uses an unknown method")
        try:
            return bool(check_password_hash(hashed, plaintext))
        except (TypeError, ValueError) as exc:
            raise HashingError("Stored password hash is malformed") from exc
