"""
Export configuration settings.
"""

import os

# Density tiers exported when no --tiers option is given
DEFAULT_TARGET_TIERS = ("mdpi", "hdpi", "xhdpi", "xxhdpi")

# Old fixed four bucket layout, kept as a deprecated preset
LEGACY_TARGET_TIERS = ("ldpi", "mdpi", "hdpi", "xhdpi")
LEGACY_SOURCE_DENSITY = "mdpi"

DEFAULT_SOURCE_DENSITY = os.environ.get("DRAWABLE_EXPORT_DENSITY", "xxhdpi")
DEFAULT_RESIZE_METHOD = os.environ.get("DRAWABLE_EXPORT_RESIZE_METHOD", "Automatic")
DEFAULT_OUTPUT_DIR = os.environ.get("DRAWABLE_EXPORT_OUTPUT")

# Output folder name is this prefix followed by the tier suffix
FOLDER_PREFIX = "drawable-"

# File names longer than this are written as TEMP_FILENAME inside a private
# staging folder first, then renamed into place
LONG_NAME_THRESHOLD = 27
TEMP_FILENAME = "temp.png"
STAGING_PREFIX = ".staging-"

METADATA_FILENAME = "export_metadata.json"

# Name used when normalization leaves nothing behind
FALLBACK_NAME = "unnamed"

# Raster formats picked up when a directory is opened as a document
LAYER_FILE_EXTENSIONS = (".png", ".webp", ".gif", ".bmp", ".tif", ".tiff", ".jpg", ".jpeg")
PSD_FILE_EXTENSIONS = (".psd", ".psb")
