"""
Centralized constants for gitlanes.

Default geometry and palette values used when no settings file overrides them.
"""

# Graph geometry (pixels)
LANE_WIDTH = 16
ROW_HEIGHT = 28
NODE_RADIUS = 4
MIN_GRAPH_WIDTH = 40

# Lane palette, indexed by color index modulo its length
LANE_PALETTE = [
    "#4ec9b0",  # Teal
    "#ce9178",  # Orange
    "#9cdcfe",  # Light blue
    "#c586c0",  # Purple
    "#dcdcaa",  # Yellow
    "#4fc1ff",  # Cyan
    "#d16969",  # Red
    "#b5cea8",  # Green
]

# Upper bound on rows handed to a single topology build
DEFAULT_MAX_COMMITS = 500

# Prefix used for synthetic stash rows
STASH_REF_PREFIX = "stash@"
