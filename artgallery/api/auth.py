"""
Account API endpoints.

Thin pass-through to the hosted identity service. Tokens are returned to
the caller, who sends the access token back as a bearer credential.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from artgallery.api.deps import get_access_token, get_current_user, raise_for_failure
from artgallery.catalog.identity import IdentityClient, get_identity_client
from artgallery.config import settings
from artgallery.models.failure import KnownError
from artgallery.models.user import UserProfile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class UserResponse(BaseModel):
    """Response model for the signed-in user."""

    id: str
    email: str | None = None
    role: str
    is_admin: bool
    email_verified: bool
    first_name: str | None = None
    last_name: str | None = None


class SignInRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)


class SignInResponse(BaseModel):
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    user: UserResponse


class SignUpRequest(BaseModel):
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class SignUpResponse(BaseModel):
    user: UserResponse
    verification_email_sent: bool = Field(
        description="True when the account still has to be confirmed by email",
    )


class ProfileUpdateRequest(BaseModel):
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


def user_response(user: UserProfile) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        role=user.role,
        is_admin=user.is_admin,
        email_verified=user.is_email_verified,
        first_name=user.first_name,
        last_name=user.last_name,
    )


@router.post("/sign-in", response_model=SignInResponse)
async def sign_in(
    request: SignInRequest,
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> SignInResponse:
    try:
        session = await identity.sign_in_with_password(request.email, request.password)
    except KnownError as e:
        raise_for_failure(e)

    return SignInResponse(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        user=user_response(session.user),
    )


@router.post("/sign-up", response_model=SignUpResponse, status_code=status.HTTP_201_CREATED)
async def sign_up(
    request: SignUpRequest,
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> SignUpResponse:
    """
    Create an account.

    The confirmation link in the verification email leads back to the
    storefront's verify-email page.
    """
    redirect_to = f"{settings.frontend_url.rstrip('/')}/verify-email"
    try:
        user = await identity.sign_up(
            request.email,
            request.password,
            request.first_name,
            request.last_name,
            redirect_to=redirect_to,
        )
    except KnownError as e:
        raise_for_failure(e)

    logger.info("Account created for user %s", user.id)
    return SignUpResponse(
        user=user_response(user),
        verification_email_sent=not user.is_email_verified,
    )


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT)
async def sign_out(
    token: Annotated[str, Depends(get_access_token)],
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> None:
    try:
        await identity.sign_out(token)
    except KnownError as e:
        raise_for_failure(e)


@router.get("/me", response_model=UserResponse)
async def get_me(
    user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserResponse:
    return user_response(user)


@router.put("/me", response_model=UserResponse)
async def update_me(
    request: ProfileUpdateRequest,
    token: Annotated[str, Depends(get_access_token)],
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> UserResponse:
    """Update the signed-in user's name."""
    try:
        user = await identity.update_user(
            token,
            {
                "first_name": request.first_name,
                "last_name": request.last_name,
                "full_name": f"{request.first_name} {request.last_name}",
            },
        )
    except KnownError as e:
        raise_for_failure(e)

    return user_response(user)


@router.post("/verification", response_model=MessageResponse)
async def resend_verification(
    user: Annotated[UserProfile, Depends(get_current_user)],
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> MessageResponse:
    """Send the sign-up verification email again."""
    if user.is_email_verified:
        return MessageResponse(message="Email already verified")

    if not user.email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User email is not available",
        )

    try:
        await identity.resend_verification(user.email)
    except KnownError as e:
        raise_for_failure(e)

    return MessageResponse(message="Verification email sent")
