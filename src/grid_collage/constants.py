"""
Constants used internally by the grid collage engine.

These are implementation-level values that should not be overridden
via config files or CLI arguments.
"""

# Grid bounds
GRID_SIZE_MIN = 1
GRID_SIZE_MAX = 10

# Decoder accepts only these extensions (lowercase, no dot)
SUPPORTED_EXTENSIONS = ("jpg", "jpeg", "png", "bmp", "gif", "tiff", "webp")

# Internal color constants
COLOR_MODE_RGB = "RGB"
COLOR_WHITE = (255, 255, 255)
BACKGROUND_COLOR = COLOR_WHITE

# 16-bit integer samples are mapped onto 0..255 by this factor
HIGH_BIT_DEPTH_SCALE = 1 / 256

# Progress milestones, in percent
PROGRESS_SLOTS_ENUMERATED = 20
PROGRESS_NORMALIZED = 40
PROGRESS_SIZED = 60
PROGRESS_PAINT_SPAN = 35
PROGRESS_BEFORE_SAVE = 95
PROGRESS_DONE = 100

# Encoding
JPEG_QUALITY_MIN = 1
JPEG_QUALITY_MAX = 100
TEMP_SUFFIX = ".partial"

# Minimum thumbnail edge, mirrors the smallest drop cell
THUMBNAIL_MIN_PX = 50
