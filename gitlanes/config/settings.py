"""
Settings management for gitlanes
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any

from gitlanes.constants import (
    DEFAULT_MAX_COMMITS,
    LANE_PALETTE,
    LANE_WIDTH,
    NODE_RADIUS,
    ROW_HEIGHT,
)

logger = logging.getLogger(__name__)

MAX_COMMITS_ENV = "GITLANES_MAX_COMMITS"


def _overlay(base: dict[str, Any], updates: dict[str, Any]) -> None:
    """Write ``updates`` into ``base``, descending into sections both sides have"""
    for key, value in updates.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _overlay(current, value)
        else:
            base[key] = value


class GraphSettings:
    """Manages graph rendering settings"""

    DEFAULT_SETTINGS = {
        "graph": {
            "lane_width": LANE_WIDTH,
            "row_height": ROW_HEIGHT,
            "node_radius": NODE_RADIUS,
            "palette": list(LANE_PALETTE),
            "max_commits": DEFAULT_MAX_COMMITS,  # Rows handed to one topology build
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        if config_path is None:
            config_path = Path.home() / ".config" / "gitlanes" / "settings.json"

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Overlay the settings file, if there is one, on the defaults"""
        if not self.config_path.exists():
            return
        _overlay(self.settings, json.loads(self.config_path.read_text()))

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(self.settings, indent=2))

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'graph.lane_width')"""
        node: Any = self.settings
        for key in path.split("."):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return node

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path, creating missing sections"""
        *sections, key = path.split(".")
        node = self.settings
        for section in sections:
            node = node.setdefault(section, {})
        node[key] = value

    def get_lane_width(self) -> int:
        return int(self.get("graph.lane_width", LANE_WIDTH))

    def get_row_height(self) -> int:
        return int(self.get("graph.row_height", ROW_HEIGHT))

    def get_node_radius(self) -> int:
        return int(self.get("graph.node_radius", NODE_RADIUS))

    def get_palette(self) -> list[str]:
        """Get the lane palette, falling back to the default if the configured one is empty."""
        palette = self.get("graph.palette")
        if not palette:
            return list(LANE_PALETTE)
        return [str(color) for color in palette]

    def get_max_commits(self) -> int:
        """Get the maximum number of rows to lay out in one build.

        A GITLANES_MAX_COMMITS environment variable holding an integer
        overrides the settings file. The result is never negative.
        """
        limit = int(self.get("graph.max_commits", DEFAULT_MAX_COMMITS))
        env_value = os.environ.get(MAX_COMMITS_ENV, "")
        if env_value:
            try:
                limit = int(env_value)
            except ValueError:
                logger.warning("Ignoring %s=%r: not an integer", MAX_COMMITS_ENV, env_value)
        return max(limit, 0)
