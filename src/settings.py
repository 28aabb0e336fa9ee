# settings.py
# Configuration for the destruction density dashboard.
# Every path/URL can be overridden through the environment.
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parents[1]
STATIC_DIR = BASE_DIR / "static"

# --- Data sources ---
DATA_URL = os.environ.get("GAZA_MAP_DATA_URL", str(STATIC_DIR / "bombing.geojson"))
MUNI_URL = os.environ.get("GAZA_MAP_MUNI_URL", str(STATIC_DIR / "muni.geojson"))
TOTALS_PATH = os.environ.get("GAZA_MAP_TOTALS_PATH")  # optional, see preprocess_geojson.py

MAP_STYLE = os.environ.get(
    "GAZA_MAP_STYLE",
    "https://basemaps.cartocdn.com/gl/dark-matter-gl-style/style.json",
)
LOG_LEVEL = os.environ.get("GAZA_MAP_LOG_LEVEL", "INFO")

LEGEND_IMAGE = STATIC_DIR / "legende.svg"
NORTH_ARROW_IMAGE = STATIC_DIR / "north_arrow.svg"

# --- Camera ---
INITIAL_MAIN_VIEW = dict(longitude=34.34, latitude=31.35, zoom=10.5, max_zoom=20, pitch=0, bearing=-50)
INITIAL_MINIMAP_VIEW = dict(longitude=34.47, latitude=31.4, zoom=5)

# --- Density cells (meters) ---
CELL_SIZE_MIN = 110
CELL_SIZE_MAX = 300
CELL_SIZE_STEP = 10
CELL_SIZE_DEFAULT = 110

# --- Contours ---
BANDS = [
    {"threshold": [1, 3], "color": [255, 255, 178]},
    {"threshold": [3, 7], "color": [254, 204, 92]},
    {"threshold": [7, 13], "color": [253, 141, 60]},
    {"threshold": [13, 21], "color": [240, 59, 32]},
    {"threshold": [21, 5000], "color": [189, 0, 38]},
]

LINES = [
    {"threshold": 3, "color": [254, 204, 92], "strokeWidth": 2},
    {"threshold": 7, "color": [253, 141, 60], "strokeWidth": 2},
    {"threshold": 13, "color": [240, 59, 32], "strokeWidth": 2},
    {"threshold": 21, "color": [189, 0, 38], "strokeWidth": 2},
    {"threshold": 50, "color": [189, 0, 38], "strokeWidth": 2},
]

# --- Colours ---
MUNI_LINE_COLOR = [70, 70, 70]
MUNI_HIGHLIGHT_COLOR = [255, 255, 255, 150]
MUNI_TRANSPARENT_COLOR = [255, 0, 0, 0]
MINI_FILL_COLOR = [0, 0, 0, 0]
BAR_COLOR = "rgba(184, 56, 30, 0.7)"
BAR_HIGHLIGHT_COLOR = "rgba(232, 171, 171, 0.87)"


def validate_bands(bands):
    """Band ranges must be well formed, non-overlapping and increasing."""
    previous_upper = None
    for band in bands:
        lower, upper = band["threshold"]
        if lower >= upper:
            raise ValueError(f"Contour band {band['threshold']} is empty or reversed.")
        if previous_upper is not None and lower < previous_upper:
            raise ValueError(f"Contour band {band['threshold']} overlaps the previous band.")
        previous_upper = upper
    return bands


def validate_lines(lines):
    """Line thresholds must be scalars in strictly increasing order."""
    thresholds = [line["threshold"] for line in lines]
    for a, b in zip(thresholds, thresholds[1:]):
        if b <= a:
            raise ValueError(f"Contour line thresholds must increase: {a} then {b}.")
    return lines


def validate_cell_size(value: int) -> int:
    value = int(value)
    if not CELL_SIZE_MIN <= value <= CELL_SIZE_MAX:
        raise ValueError(f"Cell size {value} outside [{CELL_SIZE_MIN}, {CELL_SIZE_MAX}].")
    if (value - CELL_SIZE_MIN) % CELL_SIZE_STEP:
        raise ValueError(f"Cell size {value} is not a multiple of {CELL_SIZE_STEP} from {CELL_SIZE_MIN}.")
    return value


def cell_size_options():
    return list(range(CELL_SIZE_MIN, CELL_SIZE_MAX + 1, CELL_SIZE_STEP))


validate_bands(BANDS)
validate_lines(LINES)
