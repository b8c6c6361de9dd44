"""Password hashing for Basic-auth credentials, using ``bcrypt`` directly.

``verify_password`` accepts a missing hash so that an unknown username costs
the same bcrypt round as a wrong password.

bcrypt only looks at the first 72 bytes of a secret and current releases
raise ValueError beyond that. Hashing refuses such passwords; verifying treats
them as a mismatch after spending the same bcrypt round.
"""

import bcrypt

MAX_PASSWORD_BYTES = 72

# Hash of a random throwaway secret; only ever compared against, never matched.
_DUMMY_HASH: bytes = bcrypt.hashpw(b"cashcard-dummy-secret", bcrypt.gensalt())


def hash_password(plain: str) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string.

    Raises ValueError for passwords longer than MAX_PASSWORD_BYTES.
    """
    secret = plain.encode("utf-8")
    if len(secret) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(secret, bcrypt.gensalt()).decode("utf-8")


def verify_password(plain: str, hashed: str | None) -> bool:
    """Check *plain* against *hashed*; ``hashed=None`` always fails."""
    secret = plain.encode("utf-8")
    if hashed is None or len(secret) > MAX_PASSWORD_BYTES:
        bcrypt.checkpw(secret[:MAX_PASSWORD_BYTES], _DUMMY_HASH)
        return False
    return bcrypt.checkpw(secret, hashed.encode("utf-8"))
