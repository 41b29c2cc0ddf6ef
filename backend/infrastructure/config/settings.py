import os
from typing import Optional

from dotenv import load_dotenv

# Infra env settings: Neo4j connection only. Service-side switches live under
# `backend/config/`. The project-root `.env` wins over the shell environment so
# that edits to it always take effect.
load_dotenv(override=True)


def _get_env_int(key: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(key)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"Environment variable {key} must be an integer, got {raw}") from exc


# ===== Neo4j connection =====

NEO4J_URI = os.getenv("NEO4J_URI", "bolt://localhost:7687").strip() or "bolt://localhost:7687"
NEO4J_USERNAME = os.getenv("NEO4J_USERNAME", "neo4j")
NEO4J_PASSWORD = os.getenv("NEO4J_PASSWORD", "")
# `neo4jDatabase` is the variable name older deployments used.
NEO4J_DATABASE = (
    os.getenv("NEO4J_DATABASE") or os.getenv("neo4jDatabase") or "neo4j"
).strip() or "neo4j"
NEO4J_MAX_POOL_SIZE = _get_env_int("NEO4J_MAX_POOL_SIZE", 10) or 10

NEO4J_CONFIG = {
    "uri": NEO4J_URI,
    "username": NEO4J_USERNAME,
    "password": NEO4J_PASSWORD,
    "database": NEO4J_DATABASE,
    "max_pool_size": NEO4J_MAX_POOL_SIZE,
}
