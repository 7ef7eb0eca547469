"""Configuration helpers for environment variables."""

from __future__ import annotations

import os
import logging

from dotenv import load_dotenv


logger = logging.getLogger(__name__)


_STORE_BACKENDS = {"memory", "sqlite", "supabase"}
_TEST_ENVS = {"test", "ci"}


def _should_load_dotenv() -> bool:
    """Return whether local dotenv loading should run."""
    app_env = os.getenv("APP_ENV", "dev").strip().lower()
    return app_env in {"dev", "local"}


if _should_load_dotenv():
    load_dotenv()


def get_env(name: str, default: str | None = None) -> str | None:
    """Return a raw environment value or default."""
    return os.getenv(name, default)


def app_env() -> str:
    """Return the current application environment."""
    return (get_env("APP_ENV", "dev") or "dev").strip() or "dev"


def cors_allow_origins() -> list[str]:
    """Return CORS allowed origins from env with safe environment defaults."""
    raw_origins = get_env("CORS_ALLOW_ORIGINS", "") or ""
    parsed_origins = [origin.strip() for origin in raw_origins.split(",") if origin.strip()]

    if parsed_origins:
        return parsed_origins

    if app_env().strip().lower() in {"dev", "local"}:
        return ["http://localhost:3000", "http://127.0.0.1:3000"]

    ui_origin = (get_env("UI_ORIGIN", "") or "").strip()
    if ui_origin:
        return [ui_origin]

    logger.warning(
        "cors_allow_origins_empty_in_prod app_env=%s; define CORS_ALLOW_ORIGINS or UI_ORIGIN",
        app_env(),
    )

    return []


def log_level() -> str:
    """Return the root log level name."""
    return (get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper() or "INFO"


def finance_store() -> str:
    """Return the configured store backend: memory, sqlite or supabase."""
    raw_value = (get_env("FINANCE_STORE", "") or "").strip().lower()
    if not raw_value:
        return "memory" if app_env().strip().lower() in _TEST_ENVS else "sqlite"

    if raw_value not in _STORE_BACKENDS:
        logger.warning("finance_store_unknown value=%s; falling back to sqlite", raw_value)
        return "sqlite"

    return raw_value


def sqlite_path() -> str:
    """Return the SQLite database file path."""
    return (get_env("SQLITE_PATH", "finance.db") or "finance.db").strip() or "finance.db"


def api_host() -> str:
    """Return the interface the HTTP server binds to."""
    return (get_env("API_HOST", "127.0.0.1") or "127.0.0.1").strip() or "127.0.0.1"


def api_port() -> int:
    """Return the HTTP server port, defaulting to 8080 on invalid values."""
    raw_value = (get_env("API_PORT", "") or "").strip()
    try:
        return int(raw_value) if raw_value else 8080
    except ValueError:
        logger.warning("api_port_invalid value=%s", raw_value)
        return 8080


def supabase_url() -> str | None:
    """Return Supabase URL when configured."""
    return get_env("SUPABASE_URL")


def supabase_service_role_key() -> str | None:
    """Return Supabase service role key when configured."""
    return get_env("SUPABASE_SERVICE_ROLE_KEY")
