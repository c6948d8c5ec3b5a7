"""Password hashing and verification (bcrypt)."""

import bcrypt

from conference.core.config import get_settings

# Min/max lengths for password validation.
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage with a fresh salt. Do not store plain passwords."""
    if rounds is None:
        rounds = get_settings().BCRYPT_ROUNDS
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes verify as False."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


# Compared against when the login identifier is unknown, so both failure paths cost one bcrypt check.
# Built at import with the configured cost.
_DUMMY_HASH = hash_password("dummy-password-for-timing")


def burn_password_check(plain_password: str) -> bool:
    """Run a verification against a throwaway hash and return False."""
    verify_password(plain_password, _DUMMY_HASH)
    return False
