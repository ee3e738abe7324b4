"""
Layer Zoom Viewer - Constants and Configuration

This module contains all constant values used throughout the application:
- View transform limits
- Navigation animation timings
- Auto-navigation thresholds
- Rendering and input constants
"""

# ======================================================================
# VIEW TRANSFORM LIMITS
# ======================================================================
# Every settable scale is clamped to this range
MIN_SCALE = 0.1
MAX_SCALE = 10.0

# Node framing: apparent node radius fills viewport_width / margin
FRAME_MARGIN_FACTOR = 2.2

# ======================================================================
# NAVIGATION ANIMATION TIMINGS (milliseconds)
# ======================================================================
ZOOM_IN_DURATION_MS = 500
ZOOM_OUT_DURATION_MS = 500
GO_HOME_DURATION_MS = 600
NAVIGATE_TO_LAYER_DURATION_MS = 400
ANIMATE_ZOOM_DURATION_MS = 400
WHEEL_ZOOM_DURATION_MS = 200

# Animation channel names
TRANSFORM_CHANNEL = "transform"
ZOOM_CHANNEL = "zoom"

# ======================================================================
# AUTO-NAVIGATION
# ======================================================================
# Drill in when a drillable node's diameter reaches this fraction of the viewport width
AUTO_IN_FRACTION = 0.45
AUTO_IN_FRACTION_MIN = 0.45
AUTO_IN_FRACTION_MAX = 0.9

# Drill out when the live scale falls below this value
AUTO_OUT_SCALE = 0.6

# Quiet period after any drill-out before auto drill-in may fire again
AUTO_COOLDOWN_MS = 900

# ======================================================================
# FRAME SCHEDULING
# ======================================================================
FRAME_INTERVAL_MS = 16  # ~60 Hz display refresh

# ======================================================================
# INPUT
# ======================================================================
WHEEL_ZOOM_FACTOR = 1.3

# Zoom toolbar presets (percent)
ZOOM_PRESETS = [10, 25, 50, 75, 100, 150, 200, 400, 600, 1000]

# ======================================================================
# RENDERING
# ======================================================================
DEFAULT_BACKGROUND_COLOR = "#ffffff"
DEFAULT_NODE_COLOR = "#888888"
NODE_OUTLINE_COLOR = "#ffffff"
NODE_LABEL_COLOR = "#ffffff"
NODE_OUTLINE_WIDTH = 2
NODE_FILL_ALPHA = 0.9
NODE_LABEL_POINT_SIZE = 12

# Headless renderer output size
HEADLESS_WIDTH = 800
HEADLESS_HEIGHT = 600

# ======================================================================
# USER CONFIGURATION
# ======================================================================
CONFIG_DIR_NAME = ".layerzoom"
CONFIG_FILE_NAME = "config.json"
MAX_RECENT_FILES = 10
