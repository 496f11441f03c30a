"""
HairBook Backend — Password Hashing
=====================================

What:  One-way salted hashing and verification of user passwords.
How:   passlib `CryptContext` with the bcrypt scheme at a fixed cost
       factor of 10. Every call to `hash()` draws a fresh salt, so hashing
       the same password twice yields two different digests.
Who:   UserService (registration and login).

Failures inside the bcrypt backend are not caught here; they surface as
unexpected errors (HTTP 500).
"""

import logging

from passlib.context import CryptContext

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


class PasswordHasher:
    """Thin wrapper over a bcrypt CryptContext."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
            bcrypt__ident="2b",
        )

    def hash(self, plaintext: str) -> str:
        """Returns a salted bcrypt digest (`$2b$10$...`)."""
        return self._context.hash(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        """True iff `plaintext` hashes to `digest` under the digest's own salt and cost."""
        return self._context.verify(plaintext, digest)

    def dummy_verify(self) -> None:
        """
        Spends the time of one real verification without a stored digest.

        Login calls this for unknown emails so that response time does not
        tell registered and unregistered emails apart.
        """
        self._context.dummy_verify()
