"""
FastAPI dependency that protects routes behind JWT authentication.
"""

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from vpcprovider.services.auth import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/token")


def get_current_client(token: str = Depends(oauth2_scheme)) -> str:
    """Return the authenticated client id or raise HTTP 401."""
    client_id = decode_access_token(token)
    if client_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return client_id
