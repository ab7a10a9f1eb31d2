"""Password hashing and bearer token helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import JWTError, jwt
from passlib.context import CryptContext

from app import config
from app.errors import AuthError

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=config.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def create_access_token(user_id: int, email: str, expires_delta: timedelta | None = None) -> str:
    """
    Sign a token carrying ``{userId, email}``.

    Args:
        user_id: Id of the authenticated user.
        email: The user's login email.
        expires_delta: Optional override of the validity window
            (``TOKEN_EXPIRE_DAYS`` by default).

    Returns:
        Encoded JWT string.
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=config.TOKEN_EXPIRE_DAYS))
    to_encode = {"userId": user_id, "email": email, "exp": expire}
    return jwt.encode(to_encode, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry, and return the ``{userId, email}`` claims.

    Raises:
        AuthError: If the token is malformed, tampered with, expired, or
            lacks the identity claims.
    """
    try:
        payload = jwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except JWTError as exc:
        raise AuthError("Invalid or expired token.") from exc

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not payload.get("email"):
        raise AuthError("Invalid or expired token.")
    return {"userId": user_id, "email": payload["email"]}
