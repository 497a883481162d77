"""Binds a signed-in account to a GitHub handle."""

import asyncio
import logging
from typing import Optional

import httpx
from pydantic import BaseModel

from hubfeed.auth import AuthService
from hubfeed.directory import HandleDirectory
from hubfeed.errors import DuplicateHandle
from hubfeed.fetcher import GitHubFetcher
from hubfeed.models import Session

logger = logging.getLogger(__name__)

SAVE_FAILED = "Failed to save username to database."


class BindResult(BaseModel):
    """Outcome of binding a handle."""

    session: Session
    registered: bool = True
    warning: Optional[str] = None


class IdentityBinder:
    """Suggests and records the GitHub username for an account."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        directory: HandleDirectory,
        auth: AuthService,
    ) -> None:
        self.fetcher = fetcher
        self.directory = directory
        self.auth = auth

    async def suggest_handle(self, email: str) -> Optional[str]:
        """GitHub login whose public email matches, or None."""
        if not email:
            return None
        try:
            return await self.fetcher.search_user_by_email(email)
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error("GitHub user search failed for %s: %s", email, e)
            return None

    async def bind(self, session: Session, handle: str) -> BindResult:
        """Attach ``handle`` to the session, then register it.

        The session is updated before the store write, so a store failure
        never blocks the user.
        """
        handle = handle.strip()
        if not handle:
            raise ValueError("Username cannot be empty.")

        updated = session.model_copy(update={"username": handle})
        self.auth.remember(updated)

        try:
            await asyncio.to_thread(self.directory.register, handle)
        except DuplicateHandle:
            logger.warning("Username %s already exists, skipping insert.", handle)
        except Exception as e:
            logger.error("Failed to register handle %s: %s", handle, e)
            return BindResult(session=updated, registered=False, warning=SAVE_FAILED)
        return BindResult(session=updated)
