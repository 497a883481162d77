"""Supabase email/password auth and the locally persisted session."""

import json
import logging
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError
from supabase import Client
from supabase_auth.errors import AuthError

from hubfeed.config import Settings
from hubfeed.directory import get_supabase_client
from hubfeed.errors import AuthFailed
from hubfeed.models import Session

logger = logging.getLogger(__name__)

ROUTE_AUTH = "auth"
ROUTE_USERNAME = "username"
ROUTE_HOME = "home"


def resolve_route(session: Optional[Session]) -> str:
    """Where a visitor lands: sign-in, handle selection, or the feed."""
    if session is None or not session.logged_in:
        return ROUTE_AUTH
    if not session.has_handle:
        return ROUTE_USERNAME
    return ROUTE_HOME


class SessionStore:
    """Keeps the current session as JSON on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Optional[Session]:
        if not self.path.exists():
            return None
        try:
            return Session.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, e)
            return None

    def save(self, session: Session) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(session.model_dump_json(), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class AuthService:
    """Sign up, sign in and sign out against Supabase auth."""

    def __init__(
        self,
        settings: Settings,
        store: Optional[SessionStore] = None,
        client_factory: Optional[Callable[[], Client]] = None,
    ) -> None:
        self.settings = settings
        self.store = store or SessionStore(settings.session_path)
        self._client_factory = client_factory or (lambda: get_supabase_client(settings))
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    # ── Credentials ───────────────────────────────────────────────────────

    def sign_up(self, email: str, password: str) -> Session:
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as e:
            logger.info("Sign-up rejected for %s: %s", email, e.message)
            raise AuthFailed(e.message) from e
        return self._start_session(response.user, email)

    def sign_in(self, email: str, password: str) -> Session:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as e:
            logger.info("Sign-in rejected for %s: %s", email, e.message)
            raise AuthFailed(e.message) from e
        return self._start_session(response.user, email)

    def sign_out(self) -> None:
        """End the session locally even when the backend call fails."""
        try:
            if self.settings.has_supabase:
                self.client.auth.sign_out()
        except AuthError as e:
            logger.warning("Supabase sign-out failed: %s", e.message)
        finally:
            self.store.clear()

    def _start_session(self, user, fallback_email: str) -> Session:  # type: ignore[no-untyped-def]
        email = getattr(user, "email", None) or fallback_email
        session = Session(email=email, logged_in=True)
        self.store.save(session)
        logger.info("Signed in as %s", email)
        return session

    # ── Session lifecycle ─────────────────────────────────────────────────

    def restore(self) -> Optional[Session]:
        """Stored session first, then whatever Supabase still holds."""
        stored = self.store.load()
        if stored is not None:
            return stored
        if not self.settings.has_supabase:
            return None
        try:
            live = self.client.auth.get_session()
        except AuthError as e:
            logger.warning("Could not read Supabase session: %s", e.message)
            return None
        if live is None or live.user is None or not live.user.email:
            return None
        session = Session(email=live.user.email, logged_in=True)
        self.store.save(session)
        return session

    def remember(self, session: Session) -> None:
        self.store.save(session)
