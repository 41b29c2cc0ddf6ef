from __future__ import annotations

# Core defaults. Service-side overrides live in `backend/config/settings.py`
# and are passed in explicitly; this module never reads the environment.

# Label used when a write request does not name one.
DEFAULT_LABEL = "Memory"

# Label reported for snapshot nodes that carry no label at all.
FALLBACK_NODE_LABEL = "Node"

DEFAULT_QUERY_LIMIT = 250
DEFAULT_GRAPH_LIMIT = 500

# Coarse guard for the ad-hoc query endpoint (case-insensitive substrings).
DESTRUCTIVE_KEYWORDS = ("delete", "drop")

# Integers beyond this magnitude lose precision in JSON consumers that use
# IEEE-754 doubles, so they are returned as decimal strings.
MAX_SAFE_INTEGER = 2**53 - 1

# Largest row limit the Bolt protocol can carry (signed 64-bit integer).
MAX_QUERY_LIMIT = 2**63 - 1
