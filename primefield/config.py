"""Global configuration for primefield.

Every setting can be overridden through a ``PRIMEFIELD_*`` environment
variable, read once at import time.
"""

import os

# ---------- Lookup-table construction ----------
# "search" : linear-search inverse and root (O(N^2), the reference algorithm)
# "fast"   : Fermat inverse + one ascending pass over the squares (same table)
# "auto"   : "search" up to SEARCH_LIMIT, "fast" above it
TABLE_STRATEGIES = ("search", "fast", "auto")
TABLE_STRATEGY = os.environ.get("PRIMEFIELD_TABLE_STRATEGY", "auto")

# Largest modulus the "auto" strategy still builds by linear search.
SEARCH_LIMIT = int(os.environ.get("PRIMEFIELD_SEARCH_LIMIT", "2039"))

# Tables hold four lists of N entries each; refuse anything bigger.
MAX_TABLE_MODULUS = int(os.environ.get("PRIMEFIELD_MAX_TABLE_MODULUS", str(2**20)))

# ---------- Logging ----------
LOG_LEVEL = os.environ.get("PRIMEFIELD_LOG_LEVEL", "WARNING")

# ---------- Demo ----------
DEMO_MODULI = [5, 7]
