"""
security.py

Password hashing and JWT helpers.

Low-level primitives only: no routing or business rules live here.

Main features:
- one-way adaptive password hashing (bcrypt) and verification
- access token creation
- refresh token creation carrying the account's token version (rtv)
- access / refresh token decoding

Design principles:
- access and refresh tokens are signed with different secrets
- a single _create_token builds both kinds
- expiry (exp) is computed in UTC

Related files:
- msc_api.core.config        : secrets and expiry settings
- msc_api.core.deps          : bearer-token authentication dependency
- msc_api.core.session       : login / logout session handling

"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Literal

from jose import jwt, JWTError
from passlib.context import CryptContext

from msc_api.core.config import settings


# deprecated="auto" lets stored hashes migrate if the scheme list changes
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


"""
Compare a plain password with a stored hash.

passlib's verify is constant-time; a malformed stored hash counts as a
mismatch instead of raising.

"""

def verify_password(plain: str, hashed: str) -> bool:
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def _create_token(*, subject: str, token_type: Literal["access", "refresh"],
                  expires_delta: timedelta, secret: str, extra: Optional[dict] = None) -> str:
    expire = datetime.now(timezone.utc) + expires_delta
    payload = {
        "sub": subject,
        "type": token_type,
        "exp": int(expire.timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, secret, algorithm=settings.ALGORITHM)


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        subject=subject,
        token_type="access",
        expires_delta=expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        secret=settings.SECRET_KEY,
    )


"""
Refresh token

- longer lifetime, stored in an HttpOnly cookie
- carries rtv (refresh_token_version) so the server can revoke every
  outstanding refresh token of an account by bumping the version

"""

def create_refresh_token(subject: str, refresh_token_version: int, expires_delta: Optional[timedelta] = None) -> str:
    return _create_token(
        subject=subject,
        token_type="refresh",
        expires_delta=expires_delta or timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        secret=settings.REFRESH_SECRET_KEY,
        extra={"rtv": refresh_token_version},
    )


def decode_access_token(token: str) -> int:
    """Return the account id of a valid access token; raise JWTError otherwise."""
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Not an access token")
    sub = payload.get("sub")
    if not sub:
        raise JWTError("Missing subject")
    try:
        return int(sub)
    except ValueError:
        raise JWTError("Malformed subject")


def decode_refresh_token(token: str) -> tuple[int, int]:
    payload = jwt.decode(token, settings.REFRESH_SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "refresh":
        raise JWTError("Not a refresh token")
    try:
        account_id = int(payload["sub"])
    except (KeyError, ValueError):
        raise JWTError("Malformed subject")
    rtv = int(payload.get("rtv", -1))
    return account_id, rtv
