"""
Routing guard state machine.

Decides the one canonical screen from asynchronously arriving session
and profile data. Evaluation runs in two explicit stages:

1. SessionStage: the session source produces a definitive session (or None).
2. ProfileStage: only then, for a present session, the profile is looked up.

The guard settles at most once per distinct set of inputs, so several
entry points evaluating it concurrently produce a single redirect.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from modules.auth.interfaces import ISessionSource, ISessionSubscription
from modules.auth.models import Session
from modules.profiles.interfaces import IProfileLookup
from modules.profiles.models import ProfileCheck
from shared.exceptions import ExternalServiceError

from .decision import decide, normalize_path
from .interfaces import INavigator
from .models import GuardInputs, GuardSnapshot, GuardState, RouteDecision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionStage:
    """Result of the session stage; generation increases on every change."""

    resolved: bool = False
    session: Optional[Session] = None
    generation: int = 0


@dataclass(frozen=True)
class ProfileStage:
    """Result of the latest profile lookup."""

    user_id: Optional[str] = None
    generation: int = 0
    check: Optional[ProfileCheck] = None
    failed: bool = False


class RoutingGuard:
    """
    Session and profile gated navigation.

    Usage:
        async with RoutingGuard(sessions, profiles, navigator, path) as guard:
            await guard.app_ready()
            ...
            await guard.location_changed("/auth")

    Results of fetches that finish after close(), or that belong to a
    superseded session, are discarded.
    """

    def __init__(
        self,
        session_source: ISessionSource,
        profile_lookup: IProfileLookup,
        navigator: INavigator,
        initial_path: Optional[str] = None,
    ):
        self._session_source = session_source
        self._profile_lookup = profile_lookup
        self._navigator = navigator

        self._path = normalize_path(initial_path)
        self._app_ready = False
        self._session_stage = SessionStage()
        self._profile_stage = ProfileStage()
        self._state = GuardState.UNKNOWN
        self._snapshot: Optional[GuardSnapshot] = None

        self._alive = True
        self._subscription: Optional[ISessionSubscription] = None
        self._pending: set[asyncio.Task] = set()

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    @property
    def state(self) -> GuardState:
        return self._state

    @property
    def snapshot(self) -> Optional[GuardSnapshot]:
        return self._snapshot

    @property
    def session_stage(self) -> SessionStage:
        return self._session_stage

    @property
    def profile_stage(self) -> ProfileStage:
        return self._profile_stage

    @property
    def path(self) -> str:
        return self._path

    @property
    def alive(self) -> bool:
        return self._alive

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "RoutingGuard":
        try:
            await self.start()
        except BaseException:
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def start(self) -> Optional[RouteDecision]:
        """
        Subscribe to session changes and run the session stage.

        Any error fetching the session resolves to "no session";
        cancellation propagates.
        """
        if self._subscription is None:
            self._subscription = self._session_source.on_change(self._on_session_change)

        generation = self._session_stage.generation
        try:
            session = await self._session_source.get_session()
        except ExternalServiceError as e:
            logger.warning(f"Session fetch failed, treating as signed out: {e.message}")
            session = None
        except Exception as e:
            logger.warning(f"Session fetch failed, treating as signed out: {e!r}")
            session = None

        if not self._alive:
            return None
        if self._session_stage.generation != generation:
            # A change notification arrived while fetching and is newer
            logger.debug("Discarding superseded session fetch")
            return None

        self._apply_session(session)
        return await self.settle("session-resolved")

    async def close(self) -> None:
        """Stop reacting to events and release the session subscription."""
        if not self._alive:
            return
        self._alive = False

        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

        for task in list(self._pending):
            task.cancel()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._pending.clear()

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    async def app_ready(self) -> Optional[RouteDecision]:
        """Splash/initialisation finished."""
        self._app_ready = True
        return await self.settle("app-ready")

    async def session_resolved(self, session: Optional[Session]) -> Optional[RouteDecision]:
        """A definitive session (or None) is known."""
        if not self._alive:
            return None
        self._apply_session(session)
        return await self.settle("session-resolved")

    async def location_changed(self, path: Optional[str]) -> Optional[RouteDecision]:
        """The client moved to a new path."""
        if not self._alive:
            return None
        self._path = normalize_path(path)
        return await self.settle("location-changed")

    def _on_session_change(self, session: Optional[Session]) -> None:
        if not self._alive:
            return
        self._apply_session(session)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop in this thread; the next settle() picks the session up
            return
        task = loop.create_task(self.settle("session-changed"))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def _apply_session(self, session: Optional[Session]) -> None:
        self._session_stage = SessionStage(
            resolved=True,
            session=session,
            generation=self._session_stage.generation + 1,
        )

    # -------------------------------------------------------------------------
    # Settlement
    # -------------------------------------------------------------------------

    async def settle(self, cause: str = "evaluate") -> Optional[RouteDecision]:
        """
        Evaluate the guard.

        Returns:
            The new decision if the guard settled, or None when deferred,
            discarded, or when the inputs match the current snapshot.
        """
        if not self._alive:
            return None
        if not self._app_ready or not self._session_stage.resolved:
            logger.debug(f"Guard deferred ({cause}): app_ready={self._app_ready}, "
                         f"session_resolved={self._session_stage.resolved}")
            return None

        stage = self._session_stage
        profile: Optional[ProfileCheck] = None

        if stage.session is not None:
            profile = await self._run_profile_stage(stage)
            if profile is None:
                return None

        if not self._alive or stage.generation != self._session_stage.generation:
            logger.debug(f"Discarding stale evaluation ({cause})")
            return None

        inputs = GuardInputs(
            user_id=stage.session.user.id if stage.session is not None else None,
            profile=profile,
            path=self._path,
        )
        return self._commit(inputs, cause)

    async def _run_profile_stage(self, stage: SessionStage) -> Optional[ProfileCheck]:
        user_id = stage.session.user.id
        try:
            profile = await self._profile_lookup.find_profile_by_identity(user_id)
        except Exception as e:
            logger.warning(f"Profile lookup failed for {user_id}, keeping {self._state.value}: {e}")
            if self._alive and stage.generation == self._session_stage.generation:
                self._profile_stage = ProfileStage(
                    user_id=user_id, generation=stage.generation, failed=True
                )
            return None

        if not self._alive or stage.generation != self._session_stage.generation:
            return None

        check = ProfileCheck.from_profile(profile)
        self._profile_stage = ProfileStage(user_id=user_id, generation=stage.generation, check=check)
        return check

    def _commit(self, inputs: GuardInputs, cause: str) -> Optional[RouteDecision]:
        if self._snapshot is not None and self._snapshot.inputs == inputs:
            return None

        decision = decide(inputs.user_id is not None, inputs.profile, inputs.path)
        if decision.state != self._state:
            logger.info(f"Guard {self._state.value} -> {decision.state.value} ({cause})")

        self._state = decision.state
        self._snapshot = GuardSnapshot(
            state=decision.state,
            inputs=inputs,
            redirect=decision.redirect,
            cause=cause,
        )

        if decision.redirect is not None:
            logger.info(f"Redirecting {inputs.path} -> {decision.redirect}")
            self._navigator.replace(decision.redirect)
        return decision
