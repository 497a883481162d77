"""Runtime configuration and logging setup."""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from hubfeed.errors import ConfigError

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _env(*names: str) -> Optional[str]:
    """First non-empty value among the given environment variables."""
    for name in names:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


class Settings(BaseModel):
    """Everything hubfeed reads from the environment."""

    github_token: Optional[str] = None
    supabase_url: Optional[str] = None
    supabase_key: Optional[str] = None
    handles_table: str = "users"
    feed_sample_size: int = Field(default=10, ge=1)
    contributors_limit: int = 6
    sibling_repos_limit: int = 10
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".hubfeed")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from env vars (call ``load_dotenv`` first)."""
        values: dict = {
            "github_token": _env("GITHUB_TOKEN", "GH_TOKEN"),
            "supabase_url": _env("SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"),
            "supabase_key": _env(
                "SUPABASE_ANON_KEY", "SUPABASE_KEY", "NEXT_PUBLIC_SUPABASE_ANON_KEY"
            ),
        }
        if table := _env("HUBFEED_HANDLES_TABLE"):
            values["handles_table"] = table
        if sample := _env("HUBFEED_FEED_SAMPLE"):
            try:
                values["feed_sample_size"] = int(sample)
            except ValueError as e:
                raise ConfigError(f"HUBFEED_FEED_SAMPLE must be an integer, got {sample!r}") from e
            if values["feed_sample_size"] < 1:
                raise ConfigError(f"HUBFEED_FEED_SAMPLE must be at least 1, got {sample!r}")
        if data_dir := _env("HUBFEED_DATA_DIR"):
            values["data_dir"] = Path(data_dir).expanduser()
        if level := _env("HUBFEED_LOG_LEVEL"):
            values["log_level"] = level.upper()
        return cls(**values)

    @property
    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    @property
    def session_path(self) -> Path:
        return self.data_dir / "session.json"

    @property
    def log_path(self) -> Path:
        return self.data_dir / "hubfeed.log"

    def require_supabase(self) -> tuple[str, str]:
        """Return (url, key) or raise when Supabase is not configured."""
        if not self.supabase_url or not self.supabase_key:
            raise ConfigError(
                "Supabase URL or anonymous key not configured. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY."
            )
        return self.supabase_url, self.supabase_key


def configure_logging(settings: Settings) -> None:
    """Log to a file in the data dir and to the Textual devtools console.

    The terminal itself belongs to the TUI, so nothing goes to stderr.
    """
    from textual.logging import TextualHandler

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(settings.log_path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        handlers=[file_handler, TextualHandler()],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logger.debug("Logging to %s", settings.log_path)
