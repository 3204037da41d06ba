"""
Tienda Back Office — Password Hashing
=======================================

What:  One-way hashing and verification of user passwords with bcrypt.
Why:   Stored credentials must be useless if the `usuarios` table leaks.
How:   bcrypt with a per-hash random salt and a configurable cost factor;
       `bcrypt.checkpw` compares in constant time.

bcrypt only reads the first 72 bytes of a password. Longer inputs are cut
to 72 bytes explicitly, on both hash and verify, so hashing and checking
always see the same bytes.
"""

import logging
from functools import lru_cache

import bcrypt

from backoffice.config import settings

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _secret(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Returns the bcrypt hash (`$2b$...`) of `password` as text."""
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_secret(password), salt).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Checks `password` against a stored hash.

    A malformed stored hash counts as a mismatch (logged) rather than an
    error, so a corrupted row cannot be told apart from a wrong password.
    """
    try:
        return bcrypt.checkpw(_secret(password), password_hash.encode("ascii"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password")


def burn_verification(password: str) -> None:
    """
    Runs a full verification against a throwaway hash.

    Used when the login email matches no account, so that path costs as much
    as checking a real password.
    """
    verify_password(password, _dummy_hash())
