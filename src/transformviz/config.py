"""
Configuration & Constants
=========================
This module serves as the central registry for global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents magic numbers (zoom limits, epsilons, storage keys)
   from being scattered throughout the model, controller and view code.
2. Tuning: Numeric thresholds that balance floating point noise against
   legitimate values live in one place.

Exports:
    W_EPSILON (float): Threshold below which |w'| means "point at infinity".
    ZOOM_MIN, ZOOM_MAX (float): Clamp range for manual zoom.
    AUTOFIT_ZOOM_CAP (float): Upper bound for the zoom chosen by auto-fit.
    MATRIX_KEY, SIZE_X_KEY, SIZE_Y_KEY (str): Settings keys for persistence.
"""
import logging
import os

# ---- Geometry ----
W_EPSILON: float = 1e-10
AFFINE_EPSILON: float = 1e-10

# ---- Shape ----
DEFAULT_WIDTH: float = 5.0
DEFAULT_HEIGHT: float = 5.0

# ---- Camera ----
CANVAS_SIZE: int = 800
DEFAULT_ZOOM: float = 2.0
ZOOM_MIN: float = 0.1
ZOOM_MAX: float = 100.0
ZOOM_IN_FACTOR: float = 1.1
ZOOM_OUT_FACTOR: float = 0.9

# ---- Auto-fit ----
# Independent of ZOOM_MAX on purpose.
AUTOFIT_ZOOM_CAP: float = 50.0
AUTOFIT_MARGIN: float = 0.1  # per side, fraction of the bounding box extent
AUTOFIT_FILL: float = 0.9  # fraction of the viewport used by the fitted box

# ---- Grid ----
GRID_MIN_PX: float = 50.0
GRID_MAX_PX: float = 200.0
GRID_MAX_LINES: int = 10_000  # per axis

# ---- Readout ----
W_DISPLAY_TOLERANCE: float = 0.01
INTEGER_DISPLAY_TOLERANCE: float = 0.001

# ---- Debounce (milliseconds) ----
MATRIX_DEBOUNCE_MS: int = 50
SIZE_DEBOUNCE_MS: int = 100

# ---- Persistence keys ----
MATRIX_KEY: str = "transformation_matrix"
SIZE_X_KEY: str = "square_size_x"
SIZE_Y_KEY: str = "square_size_y"

# ---- Presets ----
PRESET_ANGLE_DEG: float = 30.0
PRESET_TRANSLATION: tuple[float, float] = (80.0, 40.0)
PRESET_SCALE: tuple[float, float] = (1.5, 0.75)

# ---- Colors ----
ORIGINAL_COLOR: str = "#3498db"
TRANSFORMED_COLOR: str = "#e74c3c"
GRID_COLOR: str = "#e0e0e0"
AXIS_COLOR: str = "#999999"
ORIGIN_LABEL_COLOR: str = "#666666"
INVALID_COLOR: str = "#e74c3c"


def get_log_level(default: int = logging.INFO) -> int:
    """
    Resolve the log level from the TRANSFORMVIZ_LOG_LEVEL environment variable.

    Accepts level names ("DEBUG", "warning", ...) or numeric values. Anything
    unrecognised falls back to `default`.
    """
    raw = os.environ.get("TRANSFORMVIZ_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default
