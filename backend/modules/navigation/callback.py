"""
Auth callback handling.

Supabase sends users back with a PKCE ``code`` query parameter. Requests
carrying one are routed to the callback screen, which exchanges the code
for a session and picks the landing screen.
"""

import logging
from typing import Mapping, Optional
from urllib.parse import urlencode

from modules.auth.interfaces import ISessionSource
from shared.exceptions import ExternalServiceError

from .decision import normalize_path
from .models import (
    AUTH_CALLBACK_PATH,
    HOME_PATH,
    PASSWORD_RESET_PATH,
    CallbackResult,
    CallbackStatus,
)

logger = logging.getLogger(__name__)

MISSING_CODE_MESSAGE = (
    "Missing `code` in URL. Make sure the redirect URL is allowed in Supabase Auth settings."
)

RECOVERY_REDIRECT = f"{PASSWORD_RESET_PATH}?{urlencode({'from': 'recovery'})}"


def route_code_request(path: Optional[str], params: Mapping[str, str]) -> Optional[str]:
    """
    Rewrite target for requests that carry an auth code.

    Returns:
        The callback URL with every query parameter preserved, or None
        when there is no code or the request is already on the callback.
    """
    if "code" not in params:
        return None
    if normalize_path(path) == AUTH_CALLBACK_PATH:
        return None
    return f"{AUTH_CALLBACK_PATH}?{urlencode(dict(params))}"


async def complete_auth_callback(
    session_source: ISessionSource,
    code: Optional[str],
    flow_type: Optional[str] = None,
    code_verifier: Optional[str] = None,
) -> CallbackResult:
    """
    Exchange the code for a session and choose where to land.

    Recovery flows land on the password reset screen; everything else
    (signup confirmation, OAuth) lands on home.
    """
    if not code:
        return CallbackResult(status=CallbackStatus.ERROR, error=MISSING_CODE_MESSAGE)

    try:
        session = await session_source.exchange_code(code, code_verifier=code_verifier)
    except ExternalServiceError as e:
        logger.warning(f"Code exchange failed ({flow_type or 'unknown'} flow): {e.message}")
        return CallbackResult(
            status=CallbackStatus.ERROR,
            error=e.message or "Failed to exchange code",
        )

    if flow_type == "recovery":
        redirect = RECOVERY_REDIRECT
    else:
        redirect = HOME_PATH
    return CallbackResult(status=CallbackStatus.REDIRECTING, redirect=redirect, session=session)
