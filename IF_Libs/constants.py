"""
Constants and configuration values for InstaFilter.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Intensity slider
MIN_INTENSITY = 0.0
MAX_INTENSITY = 1.0
DEFAULT_INTENSITY = 0.5
SLIDER_STEPS = 100

# Intensity -> parameter scale factors
RADIUS_SCALE = 200.0
SCALE_FACTOR = 10.0

# Parameter keys understood by the filter executors
PARAM_INTENSITY = "intensity"
PARAM_RADIUS = "radius"
PARAM_SCALE = "scale"
RECOGNIZED_PARAMETERS = (PARAM_INTENSITY, PARAM_RADIUS, PARAM_SCALE)

# Default filter on startup
DEFAULT_FILTER_NAME = "SepiaTone"

# Crystallize cells use a fixed seed so repeated runs are identical
CRYSTALLIZE_SEED = 0

# Sepia toning colours
SEPIA_DARK = (38, 22, 6)
SEPIA_LIGHT = (255, 238, 204)

# Review prompt
REVIEW_PROMPT_THRESHOLD = 20

# Settings persistence
SETTINGS_DIR_NAME = ".instafilter"
SETTINGS_FILE_NAME = "settings.json"
FIELD_FILTER_COUNT = "filter_count"
SCHEMA_VERSION = 1
FIELD_SCHEMA_VERSION = "schema_version"

# Export
DEFAULT_EXPORT_FORMAT = "PNG"
DEFAULT_JPEG_QUALITY = 95
SHARE_FILE_NAME = "instafilter_image"

# Photo loading
PHOTO_LOADER_MAX_WORKERS = 2

# UI constants
APP_TITLE = "Instafilter"
DEFAULT_WINDOW_WIDTH = 520
DEFAULT_WINDOW_HEIGHT = 760
PREVIEW_MIN_HEIGHT = 200
PREVIEW_MAX_HEIGHT_RATIO = 0.6

# Supported file formats
SUPPORTED_STANDARD_IMAGES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tiff", ".webp"}
IMAGE_FILE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.gif *.tiff *.webp)"
EXPORT_FILE_FILTER = "PNG Images (*.png);;JPEG Images (*.jpg *.jpeg)"
