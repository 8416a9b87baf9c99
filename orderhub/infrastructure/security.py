"""Security helpers for password hashing, temporary passwords and tokens."""

from datetime import datetime, timedelta, timezone
import secrets
import string

from jose import JWTError, jwt
from passlib.context import CryptContext

from orderhub.config import get_settings

JWT_ALGORITHM = "HS256"

pwd_context = CryptContext(
    schemes=["pbkdf2_sha256"],
    deprecated="auto",
    pbkdf2_sha256__rounds=310_000,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(user_id: str, expires_delta: timedelta | None = None) -> str:
    """Issue a bearer token whose subject is ``user_id``."""

    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {"sub": user_id, "exp": expire}, settings.secret_key, algorithm=JWT_ALGORITHM
    )


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, get_settings().secret_key, algorithms=[JWT_ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def generate_temporary_password(length: int = 10) -> str:
    """Generate an alphanumeric password with lower, upper case letters and digits."""

    alphabet = string.ascii_letters + string.digits
    while True:
        password = "".join(secrets.choice(alphabet) for _ in range(length))
        if (
            any(char.islower() for char in password)
            and any(char.isupper() for char in password)
            and any(char.isdigit() for char in password)
        ):
            return password


__all__ = [
    "create_access_token",
    "decode_access_token",
    "generate_temporary_password",
    "get_password_hash",
    "verify_password",
]
