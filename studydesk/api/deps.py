"""
Request dependencies: who is calling, and which store serves them.

The hosting environment authenticates users and signs a JWT whose `sub`
claim names the caller. That subject string is the tenant key handed to every
StudyStore call; nothing here keeps a global "current user".

    @router.get("/")
    async def list_notes(tenant: CurrentTenant, store: Store):
        return await store.get_notes(tenant)
"""

from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Cookie, Depends, Header, HTTPException, status
from jose import JWTError, jwt

from studydesk.config import get_settings
from studydesk.services import StudyStore, study_store

settings = get_settings()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def create_access_token(subject: str, *, expires_minutes: int | None = None) -> str:
    """
    Sign an identity token carrying `sub` and `exp`.

    StudyDesk never logs anyone in; this is for the hosting environment's
    tooling and for tests.
    """
    lifetime = timedelta(minutes=settings.jwt_expire_minutes if expires_minutes is None else expires_minutes)
    claims = {"sub": subject, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """Return the token's subject, or None if it is forged, expired or anonymous."""
    try:
        claims = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    subject = claims.get("sub")
    if isinstance(subject, str) and subject.strip():
        return subject
    return None


async def get_token_from_request(
    authorization: Annotated[str | None, Header()] = None,
    access_token: Annotated[str | None, Cookie()] = None,
) -> str:
    """The `access_token` cookie if present, else a `Bearer` Authorization header."""
    if access_token:
        return access_token
    scheme, _, credentials = (authorization or "").partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    raise _unauthorized("Not authenticated")


async def get_current_tenant(token: Annotated[str, Depends(get_token_from_request)]) -> str:
    tenant = decode_access_token(token)
    if tenant is None:
        raise _unauthorized("Could not validate credentials")
    return tenant


def get_study_store() -> StudyStore:
    """Process-wide store. Tests override this dependency."""
    return study_store


CurrentTenant = Annotated[str, Depends(get_current_tenant)]
Store = Annotated[StudyStore, Depends(get_study_store)]
