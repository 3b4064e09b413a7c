"""Password hashing and opaque session tokens (server-side session auth)."""
import hashlib
import secrets
import string

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def generate_session_token() -> str:
    """Random URL-safe token, 256 bits of entropy."""
    return secrets.token_urlsafe(32)


def hash_token(token: str) -> str:
    """SHA-256 of a session token; only the hash is stored."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def generate_referral_code(length: int = 10) -> str:
    return "".join(secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(length))
