# marquee/utils/settings.py
"""
Centralized settings and constants for marquee selection and the demo app.
Modules read these as defaults; constructors accept overrides.
"""

# --- General Settings ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
BG_COLOR = (18, 20, 24)
WINDOW_TITLE = "Marquee Select"

# --- Selection Settings ---
SELECT_MOUSE_BUTTON = 1  # left button
# Light green tint applied to selected objects; originals are restored on exit.
HIGHLIGHT_COLOR = (128, 255, 128, 255)

# --- Selection Box (overlay) ---
SELECTION_BOX_COLOR = (120, 220, 120)
SELECTION_BOX_FILL_ALPHA = 48
SELECTION_BOX_BORDER_WIDTH = 1

# --- Pointer Indicator ---
POINTER_INDICATOR_COLOR = (235, 235, 245)
POINTER_INDICATOR_RADIUS = 6
POINTER_INDICATOR_WIDTH = 1

# --- Overlay surface defaults ---
OVERLAY_PIVOT = (0.5, 0.5)       # normalized, measured from the surface's top-left
OVERLAY_Y_UP = True              # local vertical axis grows upward (canvas convention)
OVERLAY_PLANE_DISTANCE = 10.0    # camera-space surfaces: distance in front of the camera
OVERLAY_SCALE = 1.0              # screen pixels per local unit

# --- Camera Settings ---
CAMERA_FOV_DEG = 60.0
CAMERA_NEAR = 0.1
CAMERA_FAR = 1000.0
CAMERA_ORTHO_SIZE = 5.0          # half-height of the view volume in world units
CAMERA_ORBIT_SPEED_DEG = 90.0    # degrees per second while an arrow key is held
CAMERA_START_POSITION = (0.0, 8.0, -16.0)
CAMERA_TARGET = (0.0, 0.0, 0.0)

# --- Demo scene ---
OBJECT_COLOR = (200, 70, 70, 255)
OBJECT_RADIUS = 0.35             # world units
OBJECT_MIN_SCREEN_RADIUS = 2
DEMO_GRID_COLS = 9
DEMO_GRID_ROWS = 9
DEMO_GRID_SPACING = 1.5

# --- HUD ---
HUD_FONT_SIZE = 16
HUD_FONT_COLOR = (240, 240, 240)
