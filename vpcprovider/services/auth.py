"""
Authentication service: API client credential checks + JWT handling.

Callers (typically a Terraform wrapper or CI job) exchange a configured
client id / secret for a short-lived bearer token at POST /auth/token and
present it on every resource call.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from vpcprovider.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(subject: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT whose 'sub' claim is the client id."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    )
    payload = {"sub": subject, "exp": expire}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[str]:
    """Return the client id of a valid token, ``None`` otherwise."""
    try:
        payload = jwt.decode(
            token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm]
        )
    except JWTError:
        return None
    return payload.get("sub")


def authenticate_client(client_id: str, secret: str) -> bool:
    """Check *client_id* / *secret* against the configured API clients."""
    stored = settings.get_api_clients().get(client_id)
    if not stored:
        return False
    if stored.startswith("$2b$"):
        return pwd_context.verify(secret, stored)
    return stored == secret
