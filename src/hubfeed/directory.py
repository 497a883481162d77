"""Directory of registered handles, stored in a Supabase table."""

import logging
from typing import Callable, Optional

from postgrest.exceptions import APIError
from supabase import Client, create_client

from hubfeed.config import Settings
from hubfeed.errors import DuplicateHandle

logger = logging.getLogger(__name__)

# Postgres unique_violation
UNIQUE_VIOLATION = "23505"


def get_supabase_client(settings: Settings) -> Client:
    """Get Supabase client instance"""
    url, key = settings.require_supabase()
    return create_client(url, key)


class HandleDirectory:
    """Reads and writes the ``uname`` column of the handles table."""

    def __init__(
        self,
        settings: Settings,
        client_factory: Optional[Callable[[], Client]] = None,
    ) -> None:
        self.settings = settings
        self.table_name = settings.handles_table
        self._client_factory = client_factory or (lambda: get_supabase_client(settings))
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    def register(self, handle: str) -> None:
        """Insert a handle.

        Raises:
            DuplicateHandle: the handle is already in the table.
            APIError: any other store failure.
        """
        try:
            self.client.table(self.table_name).insert({"uname": handle}).execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateHandle(handle) from e
            raise
        logger.info("Registered handle %s", handle)

    def list_handles(self) -> list[str]:
        """Every registered handle, in table order. Empty on failure."""
        try:
            response = self.client.table(self.table_name).select("uname").execute()
        except Exception as e:
            logger.error("Failed to list handles from %s: %s", self.table_name, e)
            return []
        rows = response.data or []
        return [row["uname"] for row in rows if row.get("uname")]
