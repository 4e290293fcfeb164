"""Password digests for the identity configuration.

Digests have the form ``pbkdf2_sha256$<iterations>$<salt>$<hex digest>``.
A stored password that is not in this form is compared as plaintext.
"""

from __future__ import annotations

import hashlib
import hmac
import secrets

ALGORITHM = "pbkdf2_sha256"
DEFAULT_ITERATIONS = 260_000
SALT_BYTES = 16


def _digest(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    ).hex()


def hash_password(
    password: str,
    *,
    iterations: int = DEFAULT_ITERATIONS,
    salt: str | None = None,
) -> str:
    """Return an irreversible digest of *password* for the configuration file."""
    if iterations < 1:
        raise ValueError("iterations must be positive")
    if salt is None:
        salt = secrets.token_hex(SALT_BYTES)
    if "$" in salt:
        raise ValueError("salt must not contain '$'")
    return f"{ALGORITHM}${iterations}${salt}${_digest(password, salt, iterations)}"


def is_password_hash(value: str) -> bool:
    """Check whether *value* looks like a digest from :func:`hash_password`."""
    parts = value.split("$")
    return len(parts) == 4 and parts[0] == ALGORITHM and parts[1].isdigit()


def verify_password(password: str, stored: str) -> bool:
    """Compare a presented plaintext *password* against a *stored* digest."""
    if not is_password_hash(stored):
        return False
    _, iterations, salt, expected = stored.split("$")
    actual = _digest(password, salt, int(iterations))
    return hmac.compare_digest(actual, expected)
