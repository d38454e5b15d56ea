"""
Library-wide constants.

Nothing here is read from the environment; terminal capability probing is the
caller's business.
"""
from __future__ import annotations


VERSION: str = "0.1.0"


# ============================================================================
# Measurement
# ============================================================================

# Columns a horizontal tab occupies when measuring a line.
TAB_WIDTH: int = 4

# Entries kept in the line-width memo before the oldest are evicted.
WIDTH_CACHE_SIZE: int = 512


# ============================================================================
# Rendering
# ============================================================================

# Character every canvas cell starts out as, and the default place() filler.
BLANK: str = " "
