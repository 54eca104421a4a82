"""
Auth router — exposes the /auth/token endpoint.

Uses the OAuth2 "password" grant form: the client id goes in ``username`` and
the client secret in ``password``.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from pydantic import BaseModel

from vpcprovider.config import settings
from vpcprovider.services.auth import authenticate_client, create_access_token

router = APIRouter(prefix="/auth", tags=["Authentication"])


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds


@router.post(
    "/token",
    response_model=TokenResponse,
    summary="Obtain a JWT access token",
)
def login(form_data: OAuth2PasswordRequestForm = Depends()) -> TokenResponse:
    """Validate API client credentials and issue a JWT."""
    if not authenticate_client(form_data.username, form_data.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect client id or secret",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = create_access_token(subject=form_data.username)
    return TokenResponse(
        access_token=token,
        expires_in=settings.jwt_expire_minutes * 60,
    )
