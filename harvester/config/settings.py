"""Harvester settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# pydantic-settings reads configuration from (in priority order):
#
#   1. Keyword arguments  - CLI flags passed through build_settings()
#   2. Environment vars   - e.g. HARVESTER_USERNAME=alice
#   3. .env file          - key=value lines in the working directory
#   4. Field defaults     - below
#
# Field `verify_urls` maps to env var `HARVESTER_VERIFY_URLS`.
# config/config.yaml sits between the defaults and the environment; see
# harvester.config.loader.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from harvester.providers.page.remote_http_provider import DEFAULT_BASE_ENDPOINT


class Settings(BaseSettings):
    """Harvester settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_prefix="HARVESTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Source ===
    username: str = ""
    base_endpoint: str = DEFAULT_BASE_ENDPOINT
    # Non-empty = replay pages from this directory instead of the network.
    read_html_from_directory: str = ""
    # Non-empty = archive every fetched page into this directory.
    write_html_to_directory: str = ""

    # === Verification ===
    verify_urls: bool = False
    url_check_timeout: float = Field(default=10.0, gt=0)

    # === HTTP ===
    request_timeout: float = Field(default=30.0, gt=0)
    user_agent: str = "delicious-harvester/0.1 (+https://github.com/delicious-harvester)"

    # === Traversal ===
    # 0 = walk until a page has no "next".
    max_pages: int = Field(default=0, ge=0)

    # === App Config ===
    verbose: bool = False
    log_level: str = "INFO"
    app_env: str = "development"

    @property
    def replay_mode(self) -> bool:
        """``True`` when pages are read from a local directory."""
        return bool(self.read_html_from_directory)

    @property
    def archive_enabled(self) -> bool:
        return bool(self.write_html_to_directory)

    @property
    def page_limit(self) -> int | None:
        return self.max_pages or None

    @property
    def effective_log_level(self) -> str:
        """``DEBUG`` when verbose, otherwise the configured level."""
        return "DEBUG" if self.verbose else self.log_level.upper()
