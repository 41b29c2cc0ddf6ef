import os
from pathlib import Path

from dotenv import load_dotenv

# Service-side settings: focus on HTTP/runtime switches.
# Infrastructure env settings (Neo4j connection) live under `backend/infrastructure/config/`.
load_dotenv(override=True)


def _get_env_int(key: str, default: int) -> int:
    """Read an integer env var; unset or empty returns the default."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw}") from exc


def _get_env_bool(key: str, default: bool) -> bool:
    """Read a boolean env var (true/false/1/0/yes/no/on/off)."""
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    return raw.lower() in {"1", "true", "y", "yes", "on"}


def _get_env_list(key: str, default: list[str]) -> list[str]:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# ===== FastAPI / Uvicorn =====

SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
# `PORT` is what hosting platforms inject; SERVER_PORT is the local override.
SERVER_PORT = _get_env_int("PORT", _get_env_int("SERVER_PORT", 8080))
SERVER_RELOAD = _get_env_bool("SERVER_RELOAD", False)
SERVER_LOG_LEVEL = os.getenv("SERVER_LOG_LEVEL", "info")
SERVER_WORKERS = _get_env_int("SERVER_WORKERS", 1) or 1

UVICORN_CONFIG = {
    "host": SERVER_HOST,
    "port": SERVER_PORT,
    "reload": SERVER_RELOAD,
    "log_level": SERVER_LOG_LEVEL,
    "workers": SERVER_WORKERS,
    # Deployed behind a reverse proxy; trust its X-Forwarded-* headers.
    "proxy_headers": True,
    "forwarded_allow_ips": "*",
}

CORS_ALLOW_ORIGINS = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# ===== Static plugin manifest / OpenAPI document =====

_BACKEND_DIR = Path(__file__).resolve().parent.parent  # backend/
STATIC_DIR = Path(os.getenv("STATIC_DIR", _BACKEND_DIR / "server" / "static")).expanduser()

# ===== Memory graph =====

# Label both relationship endpoints must carry; empty matches nodes of any label.
MEMORY_RELATIONSHIP_MATCH_LABEL = os.getenv("MEMORY_RELATIONSHIP_MATCH_LABEL", "").strip()
MEMORY_QUERY_DEFAULT_LIMIT = _get_env_int("MEMORY_QUERY_DEFAULT_LIMIT", 250)
MEMORY_GRAPH_DEFAULT_LIMIT = _get_env_int("MEMORY_GRAPH_DEFAULT_LIMIT", 500)
