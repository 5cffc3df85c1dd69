"""
Navigation API endpoints.

Lets clients without a local guard ask the server for their canonical
route, using the same decision function as the client-side guard, and
runs the auth callback and password reset flows for them.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from pydantic import BaseModel, Field

from api.dependencies import get_auth_service, get_profile_service, get_session_source
from api.middleware.auth import bearer_scheme
from modules.auth.interfaces import IAuthService
from modules.auth.service import SupabaseSessionSource
from modules.profiles.interfaces import IProfileLookup
from modules.profiles.models import ProfileCheck
from shared.config import get_settings
from shared.exceptions import ExternalServiceError

from .callback import complete_auth_callback, route_code_request
from .decision import decide
from .models import (
    CallbackResult,
    PasswordResetResult,
    PasswordResetStatus,
    ResolveRouteRequest,
    ResolveRouteResponse,
)
from .password import PasswordResetFlow

logger = logging.getLogger(__name__)

router = APIRouter()


class CodeRouteRequest(BaseModel):
    """A client location with its query parameters."""

    path: str = "/"
    params: dict[str, str] = Field(default_factory=dict)


class CodeRouteResponse(BaseModel):
    """Where to rewrite the request, if anywhere."""

    rewrite: Optional[str] = None


class CallbackRequest(BaseModel):
    """Query parameters the provider sent back to the callback screen."""

    code: Optional[str] = None
    type: Optional[str] = None
    code_verifier: Optional[str] = None


class PasswordResetRequest(BaseModel):
    """New password for the recovery session named by the bearer token."""

    password: str
    confirm: str
    refresh_token: str = ""


@router.post("/resolve", response_model=ResolveRouteResponse)
async def resolve_route(
    request: ResolveRouteRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
    profiles: IProfileLookup = Depends(get_profile_service),
) -> ResolveRouteResponse:
    """
    Resolve the canonical route for the caller.

    Missing or invalid tokens count as signed out.
    """
    session = await auth.session_from_token(credentials.credentials if credentials else None)

    profile: Optional[ProfileCheck] = None
    if session is not None:
        try:
            found = await profiles.find_profile_by_identity(session.user.id)
        except ExternalServiceError as e:
            logger.warning(f"Profile lookup failed during route resolution: {e.message}")
            raise HTTPException(status_code=503, detail="Profile lookup unavailable")
        profile = ProfileCheck.from_profile(found)

    decision = decide(session is not None, profile, request.path)
    return ResolveRouteResponse(state=decision.state, redirect=decision.redirect)


@router.post("/code-route", response_model=CodeRouteResponse)
async def code_route(request: CodeRouteRequest) -> CodeRouteResponse:
    """
    Route requests carrying an auth code to the callback screen.
    """
    return CodeRouteResponse(rewrite=route_code_request(request.path, request.params))


@router.post("/callback", response_model=CallbackResult)
async def auth_callback(
    request: CallbackRequest,
    session_source: SupabaseSessionSource = Depends(get_session_source),
) -> CallbackResult:
    """
    Exchange an auth code and return where to land.

    The issued session is included so the client can store it.
    """
    return await complete_auth_callback(
        session_source,
        request.code,
        request.type,
        code_verifier=request.code_verifier,
    )


@router.post("/reset-password", response_model=PasswordResetResult)
async def reset_password(
    request: PasswordResetRequest,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session_source: SupabaseSessionSource = Depends(get_session_source),
) -> PasswordResetResult:
    """
    Set a new password for the caller's recovery session.

    Failures come back as an error result, not an HTTP error, so the
    client can show the message on the form.
    """
    if credentials is not None:
        try:
            await session_source.restore(credentials.credentials, request.refresh_token)
        except ExternalServiceError as e:
            logger.info(f"Recovery session could not be restored: {e.message}")

    flow = PasswordResetFlow(session_source, min_length=get_settings().min_password_length)
    checked = await flow.check_session()
    if checked.status != PasswordResetStatus.READY:
        return checked
    return await flow.submit(request.password, request.confirm)
