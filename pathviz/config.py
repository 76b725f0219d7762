"""
Configuration constants for the Grid Pathfinding Visualizer.

All paths, settings, and tunable parameters are defined here.
Secrets are loaded from environment variables - never hardcode them.
"""

import os
from pathlib import Path

# =============================================================================
# Path Configuration
# =============================================================================

# Project root is parent of pathviz/
PROJECT_ROOT = Path(__file__).parent.parent

# Data directory (contains saved grid layouts)
DATA_DIR = PROJECT_ROOT / "data"

# Saved layouts file (msgpack map of layout id -> layout record)
LAYOUTS_PATH = Path(os.environ.get("PATHVIZ_LAYOUTS_PATH", DATA_DIR / "layouts.msgpack"))

# =============================================================================
# Grid Configuration
# =============================================================================

# Editor grids are square; side length in cells
DEFAULT_GRID_SIZE = 20
MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 50

# Characters used by the plain-text grid format
CELL_CHARS = {
    "EMPTY": ".",
    "WALL": "#",
    "START": "S",
    "END": "E",
    "VISITED": "o",
    "PATH": "*",
}

# =============================================================================
# Replay Configuration
# =============================================================================

# Speed is a 1-100 slider value; higher is faster
DEFAULT_SPEED = 50
MIN_SPEED = 1
MAX_SPEED = 100

# Increment applied by the "increase speed" control during a replay
SPEED_STEP = 10

# User-facing message when the end cell cannot be reached
NO_PATH_MESSAGE = "No path found!"

# =============================================================================
# Web Configuration
# =============================================================================

SECRET_KEY = os.environ.get("SECRET_KEY", "pathviz-dev-key")
WEB_HOST = os.environ.get("PATHVIZ_HOST", "127.0.0.1")
WEB_PORT = int(os.environ.get("PATHVIZ_PORT", "5000"))

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# =============================================================================
# Conversion Helpers
# =============================================================================


def speed_to_delay(speed: int) -> int:
    """Convert a speed setting (1-100) to a per-cell delay in milliseconds."""
    speed = max(MIN_SPEED, min(MAX_SPEED, int(speed)))
    return MAX_SPEED + 1 - speed


def delay_to_speed(delay_ms: float) -> int:
    """Inverse of speed_to_delay, clamped to the valid speed range."""
    speed = MAX_SPEED + 1 - int(round(delay_ms))
    return max(MIN_SPEED, min(MAX_SPEED, speed))
