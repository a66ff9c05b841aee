"""
Source documents and the session that tracks them.

A Document is a canvas with an ordered list of top-level layers. Documents are
opened from a single raster file, from a directory of raster files (one layer
per file) or from a Photoshop file through psd-tools. The Session replaces a
global "active document": every operation gets the document it works on
passed in explicitly.
"""

import logging
import os
from contextlib import contextmanager
from typing import List, Optional, Tuple

from PIL import Image

from drawable_export.config import LAYER_FILE_EXTENSIONS, PSD_FILE_EXTENSIONS
from drawable_export.errors import DocumentLoadError
from drawable_export.image_ops import load_image, new_canvas

logger = logging.getLogger("drawable_export.document")

DEFAULT_RESOLUTION = 72.0
PIXELS = "pixels"


class Layer:
    """A top-level layer or group, flattened to RGBA pixels."""

    def __init__(self, name, image, offset=(0, 0), visible=True):
        self.name = name
        self.image: Optional[Image.Image] = image
        self.offset: Tuple[int, int] = offset
        self.visible = visible

    @property
    def width(self):
        return self.image.width if self.image is not None else 0

    @property
    def height(self):
        return self.image.height if self.image is not None else 0

    def __repr__(self):
        return f"Layer({self.name!r}, {self.width}x{self.height} at {self.offset})"


class Document:
    """A canvas holding top-level layers."""

    def __init__(self, name, width, height, resolution=DEFAULT_RESOLUTION, layers=None, active_layer=None):
        self.name = name
        self.width = width
        self.height = height
        self.resolution = resolution
        self.layers: List[Layer] = list(layers or [])
        self.active_layer: Optional[Layer] = active_layer

    def get_layer(self, name):
        """Return the first top-level layer called name, or None."""
        for layer in self.layers:
            if layer.name == name:
                return layer
        return None

    def duplicate_layer(self, layer, target):
        """
        Copy a layer's pixels into a target canvas at the layer's offset.

        Args:
            layer: Layer of this document
            target: RGBA PIL Image the layer is composited onto

        Returns:
            The composited image; the document and the layer are not modified
        """
        if layer.image is None:
            return target.copy()

        # paste clips layers hanging over the canvas edge, alpha_composite does not
        overlay = new_canvas(*target.size)
        overlay.paste(layer.image, layer.offset)
        return Image.alpha_composite(target, overlay)

    def __repr__(self):
        return f"Document({self.name!r}, {self.width}x{self.height}, {len(self.layers)} layers)"


class Session:
    """
    Open documents and process-wide unit preferences.
    """

    def __init__(self, ruler_units="inches", type_units="points"):
        self.documents: List[Document] = []
        self.ruler_units = ruler_units
        self.type_units = type_units

    def add_document(self, document):
        self.documents.append(document)
        return document

    def close_document(self, document):
        """Drop a document from the session without saving it."""
        if document in self.documents:
            self.documents.remove(document)

    def open(self, path, active_layer_name=None):
        """Open a document from path and add it to the session."""
        return self.add_document(open_document(path, active_layer_name=active_layer_name))

    @contextmanager
    def pixel_units(self):
        """
        Switch ruler and type units to pixels for the duration of the block.

        The original units are restored on exit, also when the block raises.
        """
        saved = (self.ruler_units, self.type_units)
        self.ruler_units = PIXELS
        self.type_units = PIXELS
        try:
            yield self
        finally:
            self.ruler_units, self.type_units = saved
            logger.debug(f"Restored units: ruler={saved[0]}, type={saved[1]}")


def _image_resolution(img):
    dpi = img.info.get("dpi")
    if dpi:
        return float(dpi[0])
    return DEFAULT_RESOLUTION


def _select_active(document, active_layer_name, default):
    if active_layer_name is None:
        document.active_layer = default
        return document

    document.active_layer = document.get_layer(active_layer_name)
    if document.active_layer is None:
        logger.warning(f"No layer named '{active_layer_name}' in {document.name}")
    return document


def open_image_document(path, active_layer_name=None):
    """Open a single raster file as a one-layer document."""
    name = os.path.splitext(os.path.basename(path))[0]
    try:
        with Image.open(path) as img:
            resolution = _image_resolution(img)
            pixels = img.convert("RGBA")
    except (OSError, ValueError) as e:
        raise DocumentLoadError(f"Error opening image {path}: {e}") from e

    layer = Layer(name, pixels)
    document = Document(name, pixels.width, pixels.height, resolution, layers=[layer])
    return _select_active(document, active_layer_name, layer)


def open_directory_document(path, active_layer_name=None):
    """
    Open a directory of raster files as a document, one layer per file.

    Files are taken in name order; the canvas is as large as the largest file.
    """
    entries = sorted(
        entry
        for entry in os.listdir(path)
        if entry.lower().endswith(LAYER_FILE_EXTENSIONS)
        and os.path.isfile(os.path.join(path, entry))
    )
    if not entries:
        raise DocumentLoadError(f"No images found in directory {path}")

    layers = []
    for entry in entries:
        img = load_image(os.path.join(path, entry))
        layers.append(Layer(os.path.splitext(entry)[0], img))

    width = max(layer.width for layer in layers)
    height = max(layer.height for layer in layers)
    name = os.path.basename(os.path.normpath(path))
    document = Document(name, width, height, layers=layers)
    logger.info(f"Opened {len(layers)} layers from {path}")
    return _select_active(document, active_layer_name, layers[0])


def open_psd_document(path, active_layer_name=None):
    """
    Open a Photoshop document with psd-tools.

    Every top-level layer or group is composited to RGBA, including hidden
    ones. The topmost layer is active unless active_layer_name picks another.
    """
    from psd_tools import PSDImage

    try:
        psd = PSDImage.open(path)
    except (OSError, ValueError) as e:
        raise DocumentLoadError(f"Error opening PSD {path}: {e}") from e

    layers = []
    for psd_layer in psd:
        pixels = psd_layer.composite(
            layer_filter=lambda item, top=psd_layer: item is top or item.is_visible()
        )
        if pixels is not None:
            pixels = pixels.convert("RGBA")
        layers.append(
            Layer(
                psd_layer.name,
                pixels,
                offset=(psd_layer.left, psd_layer.top),
                visible=psd_layer.is_visible(),
            )
        )

    name = os.path.splitext(os.path.basename(path))[0]
    document = Document(name, psd.width, psd.height, layers=layers)
    logger.info(f"Opened PSD {path} with {len(layers)} top-level layers")
    return _select_active(document, active_layer_name, layers[-1] if layers else None)


def open_document(path, active_layer_name=None):
    """
    Open a source document.

    Args:
        path: Raster file, directory of raster files or .psd/.psb file
        active_layer_name: Optional name of the layer to make active

    Returns:
        Document

    Raises:
        DocumentLoadError: If the path does not exist or cannot be read
    """
    if os.path.isdir(path):
        return open_directory_document(path, active_layer_name)
    if not os.path.isfile(path):
        raise DocumentLoadError(f"Source not found: {path}")
    if path.lower().endswith(PSD_FILE_EXTENSIONS):
        return open_psd_document(path, active_layer_name)
    return open_image_document(path, active_layer_name)
