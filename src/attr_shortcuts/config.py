"""Environment-based defaults for the package-level builders.

Every setting can also be passed explicitly to ``build_default_builder``;
the environment only supplies the defaults.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShortcutSettings(BaseSettings):
    """Settings loaded from ``ATTR_SHORTCUTS_*`` environment variables."""

    # Ignore custom shortcuts in the package-level helpers
    standard: bool = False

    # Leading marker of hidden names; stripped for canonical names and
    # prepended to hidden method names
    privacy_marker: str = "_"

    # Prepended to the name returned by ``extended``
    extends_marker: str = "+"

    model_config = SettingsConfigDict(env_prefix="ATTR_SHORTCUTS_")

    @field_validator("privacy_marker", "extends_marker")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("marker must not be empty")
        return value


@lru_cache()
def get_settings() -> ShortcutSettings:
    """Get cached settings instance."""
    return ShortcutSettings()
