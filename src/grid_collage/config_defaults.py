"""Shared default values for user-facing configuration settings."""
from grid_collage.type_defs import Language, ResampleName

# Grid
DEFAULT_GRID_SIZE = 3
DEFAULT_MAX_COLLAGE_SIZE = 4000
DEFAULT_RESAMPLE: ResampleName = "bilinear"

# Input
DEFAULT_AUTO_ORIENT = True

# Output
DEFAULT_OUTPUT_PATH = "collage.png"
DEFAULT_QUALITY = 95
DEFAULT_LANGUAGE: Language = "en"
