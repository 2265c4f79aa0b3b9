# online_store/utils/passwords.py
import base64
import hashlib
import hmac
import secrets

from online_store.utils.settings import PASSWORD_HASH_ITERATIONS

_ALGORITHM = "pbkdf2_sha256"
_SALT_BYTES = 16


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def hash_password(password: str, iterations: int | None = None) -> str:
    """PBKDF2-HMAC-SHA256, osobna losowa sol dla kazdego hasla."""
    iterations = iterations or PASSWORD_HASH_ITERATIONS
    salt = secrets.token_bytes(_SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return f"{_ALGORITHM}${iterations}${_b64(salt)}${_b64(digest)}"


def verify_password(password: str, stored: str) -> bool:
    try:
        algorithm, iterations, salt_b64, digest_b64 = stored.split("$")
    except (AttributeError, ValueError):
        return False
    if algorithm != _ALGORITHM:
        return False

    try:
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(digest_b64)
        rounds = int(iterations)
    except ValueError:
        return False

    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, rounds)
    return hmac.compare_digest(digest, expected)
