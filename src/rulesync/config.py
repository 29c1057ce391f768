"""Configuration settings for Rulesync.

Settings only feed the command-line wrapper's defaults. The shadow target set
and the canonical filename are fixed in code.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RULESYNC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Canonical storage directory; relative paths resolve under the repo root
    storage_dir: Path = Field(default=Path(".gitnexus"))

    # Failure policy for shadow targets
    best_effort: bool = False
    strict_probe: bool = False

    # JSONL event logs (disabled when unset)
    log_dir: Path | None = None

    def canonical_root(self, repo_root: Path) -> Path:
        """Resolve the canonical storage directory for ``repo_root``."""
        if self.storage_dir.is_absolute():
            return self.storage_dir
        return repo_root / self.storage_dir


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
