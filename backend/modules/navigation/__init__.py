"""
Navigation module.

Decides which screen a client shows from its session and profile state.

Public API:
- RoutingGuard: Session/profile gated navigation state machine
- decide: Pure routing decision function
- INavigator: Redirect sink supplied by the client
- complete_auth_callback, route_code_request: Auth callback handling
- PasswordResetFlow: Recovery password update
"""

from .interfaces import INavigator
from .decision import decide, normalize_path, complete_profile_url
from .guard import RoutingGuard, SessionStage, ProfileStage
from .callback import complete_auth_callback, route_code_request
from .password import PasswordResetFlow
from .models import (
    ROOT_PATH,
    AUTH_PATH,
    AUTH_CALLBACK_PATH,
    PASSWORD_RESET_PATH,
    COMPLETE_PROFILE_PATH,
    HOME_PATH,
    GuardState,
    GuardSnapshot,
    GuardInputs,
    RouteDecision,
    CallbackResult,
    CallbackStatus,
    PasswordResetResult,
    PasswordResetStatus,
)

__all__ = [
    # Interface
    "INavigator",
    # Guard
    "RoutingGuard",
    "SessionStage",
    "ProfileStage",
    "decide",
    "normalize_path",
    "complete_profile_url",
    # Auth flows
    "complete_auth_callback",
    "route_code_request",
    "PasswordResetFlow",
    # Models
    "ROOT_PATH",
    "AUTH_PATH",
    "AUTH_CALLBACK_PATH",
    "PASSWORD_RESET_PATH",
    "COMPLETE_PROFILE_PATH",
    "HOME_PATH",
    "GuardState",
    "GuardSnapshot",
    "GuardInputs",
    "RouteDecision",
    "CallbackResult",
    "CallbackStatus",
    "PasswordResetResult",
    "PasswordResetStatus",
]
