"""Password hashing using bcrypt."""

import bcrypt

DEFAULT_ROUNDS = 12

# Verified against when the email is unknown so login timing stays uniform
_DUMMY_HASH = bcrypt.hashpw(b"not-a-real-password", bcrypt.gensalt(rounds=DEFAULT_ROUNDS)).decode()


def hash_password(password: str, rounds: int = DEFAULT_ROUNDS) -> str:
    """Hash a password using bcrypt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """
    Verify a password against its hash.

    bcrypt performs the comparison in constant time. Malformed hashes never match.
    """
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def burn_password_check(password: str) -> None:
    """Spend the same time as a real verification without a stored hash."""
    verify_password(password, _DUMMY_HASH)
