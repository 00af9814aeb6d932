"""Runtime settings sourced from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


@dataclass(frozen=True)
class Settings:
    table_prefix: str
    default_locale: str
    graphql_debug: bool
    # None means every registered feature module is enabled
    enabled_modules: Optional[Tuple[str, ...]]


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _parse_modules(value: str | None) -> Optional[Tuple[str, ...]]:
    if value is None or not value.strip():
        return None
    return tuple(part.strip() for part in value.split(",") if part.strip())


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings built from environment variables."""
    return Settings(
        table_prefix=os.getenv("CRUDKIT_TABLE_PREFIX", ""),
        default_locale=os.getenv("CRUDKIT_DEFAULT_LOCALE", "en").strip() or "en",
        graphql_debug=_normalize_bool(os.getenv("CRUDKIT_GRAPHQL_DEBUG"), default=False),
        enabled_modules=_parse_modules(os.getenv("CRUDKIT_MODULES")),
    )


def module_enabled(name: str) -> bool:
    """Return whether the feature module ``name`` should be composed into the app."""
    enabled = get_settings().enabled_modules
    return enabled is None or name in enabled


def refresh_settings_cache() -> None:
    """Invalidate cached settings (useful for tests)."""
    get_settings.cache_clear()
