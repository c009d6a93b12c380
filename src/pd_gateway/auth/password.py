"""Password hashing for player accounts (bcrypt, used directly).

passlib is not used: it is unmaintained and breaks against bcrypt >= 4.
bcrypt only looks at the first 72 bytes of a password; registration caps
passwords at 64 characters so that limit never silently truncates ASCII input.
"""

import bcrypt


def hash_password(plain: str) -> str:
    """Hash a plain-text password with a fresh salt. Returns a utf-8 hash string."""
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False
