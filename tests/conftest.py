"""
Shared pytest fixtures.

Documents are built in memory from numpy arrays so tests control every pixel.
"""

import numpy as np
import pytest
from PIL import Image

from drawable_export.document import Document, Layer, Session
from drawable_export.models import ExportJob


def solid_image(width, height, color=(255, 0, 0, 255)):
    """An RGBA image filled with one color."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    pixels[:, :] = color
    return Image.fromarray(pixels, "RGBA")


def artwork_image(width, height, box, color=(0, 128, 255, 255)):
    """A transparent image with an opaque rectangle at box (left, top, right, bottom)."""
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    left, top, right, bottom = box
    pixels[top:bottom, left:right] = color
    return Image.fromarray(pixels, "RGBA")


@pytest.fixture
def session() -> Session:
    return Session()


@pytest.fixture
def output_dir(tmp_path):
    return tmp_path / "res"


@pytest.fixture
def icon_document() -> Document:
    """A 100x100 canvas with one fully opaque layer called 'My Icon'."""
    layer = Layer("My Icon", solid_image(100, 100))
    return Document("icons", 100, 100, layers=[layer], active_layer=layer)


@pytest.fixture
def layered_document() -> Document:
    """Three layers on a 64x64 canvas; 'Empty' has no visible pixels."""
    star = Layer("Star", artwork_image(20, 10, (0, 0, 20, 10)), offset=(8, 8))
    empty = Layer("Empty", Image.new("RGBA", (50, 50), (0, 0, 0, 0)))
    badge = Layer("Badge Icon", artwork_image(64, 64, (10, 20, 41, 45)))
    return Document("sheet", 64, 64, layers=[star, empty, badge], active_layer=badge)


@pytest.fixture
def job(output_dir) -> ExportJob:
    return ExportJob(
        destination_root=str(output_dir),
        source_density="xhdpi",
        target_tiers=["mdpi", "hdpi", "xhdpi", "xxhdpi"],
    )


@pytest.fixture
def make_solid():
    return solid_image


@pytest.fixture
def make_artwork():
    return artwork_image
