"""
Shared FastAPI dependencies.

Every route that reads or changes the cart, favorites or preference gets a
SessionState through ``get_state``: the browsing session is identified by
a cookie, its slices are loaded before the handler runs, and pending
changes are saved after it returns.
"""

import logging
import re
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from typing import Annotated, NoReturn
from uuid import uuid4

from fastapi import Depends, Header, HTTPException, Request, Response, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from artgallery.catalog.cache import CatalogCache, get_catalog_cache
from artgallery.catalog.client import CatalogClient, get_catalog_client
from artgallery.catalog.identity import IdentityClient, get_identity_client
from artgallery.config import PROFILES_TABLE, settings
from artgallery.db.database import get_session
from artgallery.models.failure import FailureKind, KnownError
from artgallery.models.user import UserProfile
from artgallery.state.container import SessionState
from artgallery.state.storage import SqlStateStorage

logger = logging.getLogger(__name__)

_SESSION_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{8,64}$")


def raise_for_failure(error: KnownError) -> NoReturn:
    """Convert a known failure into an HTTP error carrying its classification."""
    failure = error.to_response().failure
    raise HTTPException(
        status_code=error.status_code,
        detail=failure.model_dump(mode="json") if failure else error.message,
    ) from error


def session_id_from_request(request: Request) -> str:
    """Browsing session id from the cookie, or a fresh one."""
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id and _SESSION_ID_PATTERN.match(session_id):
        return session_id
    return uuid4().hex


async def get_state(
    request: Request,
    response: Response,
    session: Annotated[AsyncSession, Depends(get_session)],
    catalog: Annotated[CatalogCache, Depends(get_catalog_cache)],
) -> AsyncGenerator[SessionState, None]:
    """
    Session state of the calling browser.

    Changes are saved and committed after the handler returns, before the
    response goes out. Routes declare this dependency with
    ``scope="function"`` so that the teardown runs in time. Client errors
    raised by the handler still persist what load() repaired.
    """
    session_id = session_id_from_request(request)
    response.set_cookie(
        settings.session_cookie_name,
        session_id,
        httponly=True,
        samesite="lax",
    )

    state = SessionState(SqlStateStorage(session, session_id), catalog)
    prefers_dark = request.headers.get("sec-ch-prefers-color-scheme", "").lower() == "dark"
    await state.load(prefers_dark=prefers_dark)

    try:
        yield state
    except HTTPException:
        await persist_state(state, session)
        raise
    await persist_state(state, session)


async def persist_state(state: SessionState, session: AsyncSession) -> None:
    """Write pending slices and commit them."""
    try:
        await state.save()
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.exception("Failed to save session state")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Your changes could not be saved. Please try again.",
        ) from e


def get_access_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Bearer token from the Authorization header."""
    scheme, _, token = (authorization or "").partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Please sign in to continue",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token


async def get_current_user(
    token: Annotated[str, Depends(get_access_token)],
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
) -> UserProfile:
    try:
        return await identity.get_user(token)
    except KnownError as e:
        raise_for_failure(e)


@dataclass(frozen=True)
class AdminContext:
    """An administrator and a catalog client acting on their behalf."""

    user: UserProfile
    catalog: CatalogClient


async def require_admin(
    token: Annotated[str, Depends(get_access_token)],
    user: Annotated[UserProfile, Depends(get_current_user)],
    catalog: Annotated[CatalogClient, Depends(get_catalog_client)],
) -> AdminContext:
    """
    Allow configured admin users, and users whose profile role is "admin".

    The role is read from the profiles table rather than from the token's
    metadata, which the user can edit themselves.
    """
    user_catalog = catalog.with_token(token)

    if user.id in settings.admin_user_ids:
        return AdminContext(user=user.with_role("admin"), catalog=user_catalog)

    try:
        profile = await user_catalog.get_single(PROFILES_TABLE, filters={"id": user.id})
    except KnownError as e:
        raise_for_failure(e)

    profile_user = user.with_role((profile or {}).get("role"))
    if not profile_user.is_admin:
        raise_for_failure(
            KnownError(
                kind=FailureKind.FORBIDDEN,
                message="Administrator access required",
                status_code=status.HTTP_403_FORBIDDEN,
            )
        )

    return AdminContext(user=profile_user, catalog=user_catalog)
