"""
Basic image operations module.

Pillow implementations of the trim, canvas and resize primitives the
export pipeline runs on a working copy.
"""

import logging

import numpy as np
from PIL import Image

from drawable_export.densities import round_half_up
from drawable_export.errors import DocumentLoadError, EmptyArtworkError
from drawable_export.resize_methods import get_resize_method, resample_filter

logger = logging.getLogger("drawable_export.image_ops")


def load_image(image_path):
    """
    Load an image from the given path as RGBA.

    Args:
        image_path: Path to the image file

    Returns:
        PIL Image object in RGBA mode

    Raises:
        DocumentLoadError: If the file cannot be read as an image
    """
    try:
        with Image.open(image_path) as img:
            return img.convert("RGBA")
    except (OSError, ValueError) as e:
        raise DocumentLoadError(f"Error opening image {image_path}: {e}") from e


def new_canvas(width, height):
    """Create a fully transparent RGBA canvas."""
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))


def content_bbox(img):
    """
    Bounding box of the non-transparent pixels of an image.

    Returns:
        (left, top, right, bottom) or None if every pixel is transparent
    """
    alpha = np.asarray(img.getchannel("A"))
    rows = np.flatnonzero(alpha.any(axis=1))
    cols = np.flatnonzero(alpha.any(axis=0))
    if rows.size == 0 or cols.size == 0:
        return None
    return int(cols[0]), int(rows[0]), int(cols[-1]) + 1, int(rows[-1]) + 1


def trim_transparent(img):
    """
    Crop an image to the bounding box of its non-transparent pixels.

    Raises:
        EmptyArtworkError: If the image has no visible pixels
    """
    bbox = content_bbox(img)
    if bbox is None:
        raise EmptyArtworkError("Nothing left to export after trimming transparent pixels")

    if bbox == (0, 0, img.width, img.height):
        return img
    logger.debug(f"Trimmed {img.width}x{img.height} to bbox {bbox}")
    return img.crop(bbox)


def snap_to_even(img):
    """
    Grow the canvas so width and height are even, anchored top-left.

    Added pixels on the right and bottom edges are transparent.
    """
    width, height = img.size
    even_width = width + (width % 2)
    even_height = height + (height % 2)
    if (even_width, even_height) == (width, height):
        return img

    canvas = new_canvas(even_width, even_height)
    canvas.paste(img, (0, 0))
    logger.debug(f"Snapped canvas {width}x{height} to {even_width}x{even_height}")
    return canvas


def resize_to_width(img, target_width, method="Automatic", scale_styles=True):
    """
    Resize an image to a target width while maintaining aspect ratio.

    Args:
        img: PIL Image object
        target_width: Target width in pixels
        method: Resize method name or ResizeMethod; Automatic lets the engine pick
        scale_styles: Whether layer styles scale with the image. Working copies
            are flattened rasters with styles already rendered in, so the flag
            has no further effect on the pixels here

    Returns:
        Resized PIL Image object
    """
    if target_width < 1:
        raise ValueError(f"Target width must be positive, got {target_width}")

    original_width, original_height = img.size

    # Calculate height based on width to maintain aspect ratio
    target_height = max(1, round_half_up(original_height * target_width / original_width))
    target_size = (target_width, target_height)

    method = get_resize_method(method)
    resample = resample_filter(method, img.size, target_size)
    logger.debug(
        f"Resizing {original_width}x{original_height} to {target_width}x{target_height} "
        f"({method.name}, {Image.Resampling(resample).name}, scale_styles={scale_styles})"
    )

    if target_size == img.size:
        return img.copy()
    return img.resize(target_size, resample)
