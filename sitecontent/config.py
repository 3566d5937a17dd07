"""Process configuration read once from the environment at startup."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

DEFAULT_PORT = 3001
DEFAULT_HOME_PAGE_NAME = "Homepage"
DEFAULT_STATIC_DIR = "dist"
DEFAULT_SLOW_QUERY_MS = 200.0


class ConfigurationError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


@dataclass(frozen=True)
class Settings:
    tenant_id: str
    database_url: Optional[str] = None
    port: int = DEFAULT_PORT
    home_page_name: str = DEFAULT_HOME_PAGE_NAME
    home_fallback_slug: Optional[str] = None
    static_dir: str = DEFAULT_STATIC_DIR
    db_pool_min: int = 1
    db_pool_max: int = 10
    db_slow_query_ms: float = DEFAULT_SLOW_QUERY_MS
    log_level: str = "INFO"


def _float_setting(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}.")


def _int_setting(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}.")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *env* (``os.environ`` plus ``.env`` by default).

    Raises:
        ConfigurationError: if ``CMS_TENANT`` is unset or a numeric setting
            cannot be parsed.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    tenant_id = env.get("CMS_TENANT", "").strip()
    if not tenant_id:
        raise ConfigurationError("CMS_TENANT is required.")

    database_url = env.get("DATABASE_URL") or env.get("DATABASE_PUBLIC_URL") or None
    fallback_slug = env.get("CMS_HOME_FALLBACK_SLUG", "").strip() or None

    pool_min = _int_setting(env, "DB_POOL_MIN", 1)
    pool_max = _int_setting(env, "DB_POOL_MAX", 10)
    if pool_min < 1 or pool_max < pool_min:
        raise ConfigurationError("DB_POOL_MIN must be >= 1 and <= DB_POOL_MAX.")

    return Settings(
        tenant_id=tenant_id,
        database_url=database_url,
        port=_int_setting(env, "BACKEND_PORT", DEFAULT_PORT),
        home_page_name=env.get("CMS_HOME_PAGE_NAME", "").strip() or DEFAULT_HOME_PAGE_NAME,
        home_fallback_slug=fallback_slug,
        static_dir=env.get("STATIC_DIR", "").strip() or DEFAULT_STATIC_DIR,
        db_pool_min=pool_min,
        db_pool_max=pool_max,
        db_slow_query_ms=_float_setting(env, "DB_SLOW_QUERY_MS", DEFAULT_SLOW_QUERY_MS),
        log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
    )
