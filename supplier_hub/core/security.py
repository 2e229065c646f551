import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from supplier_hub.core.config import Settings
from supplier_hub.core.errors import AuthError, ConfigurationError

# Password hashing for portal users
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

BEARER_PREFIX = "Bearer "


def hash_password(password: str) -> str:
    """Hash a password with bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def verify_api_key(authorization: Optional[str], settings: Settings) -> None:
    """
    Relay authentication guard.

    Compares the bearer token against the configured API_KEY.

    Raises:
        AuthError: header missing/malformed or token mismatch (401)
        ConfigurationError: API_KEY not configured on the server (500)
    """
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        raise AuthError("Missing or invalid Authorization header. Expected: Bearer <API_KEY>")

    api_key = authorization[len(BEARER_PREFIX):]

    if not settings.API_KEY:
        raise ConfigurationError("Server configuration error: API key not configured")

    if not hmac.compare_digest(api_key.encode(), settings.API_KEY.encode()):
        raise AuthError("Invalid API key")


def create_access_token(data: dict, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """
    Decode and validate a portal JWT

    Returns:
        The payload if valid, None otherwise
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError:
        return None
