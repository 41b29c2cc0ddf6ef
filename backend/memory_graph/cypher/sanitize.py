from __future__ import annotations

import re
from typing import Optional

from memory_graph.config.settings import DEFAULT_LABEL
from memory_graph.errors import InvalidIdentifierError

# Cypher cannot bind labels or relationship types as parameters, so these are
# the only identifiers ever interpolated into statement text.
_REL_TYPE_DISALLOWED = re.compile(r"[^A-Z0-9_]")
_LABEL_DISALLOWED = re.compile(r"[^A-Za-z0-9_]")


def sanitize_relationship_type(value: str) -> str:
    """Upper-case `value` and replace anything outside [A-Z0-9_] with `_`.

    The mapping is deterministic, so the same input always produces the same
    relationship type.
    """
    raw = str(value or "")
    if not raw:
        raise InvalidIdentifierError("relationship type is required")
    return _REL_TYPE_DISALLOWED.sub("_", raw.upper())


def sanitize_label(value: Optional[str], default: str = DEFAULT_LABEL) -> str:
    raw = str(value or "").strip()
    if not raw:
        return default
    return _LABEL_DISALLOWED.sub("_", raw)


def quote_identifier(value: str) -> str:
    """Backtick-quote a sanitized identifier (keeps e.g. `1ST_DEGREE` valid)."""
    return f"`{value.replace('`', '``')}`"
