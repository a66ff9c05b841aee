"""
Resample algorithm registry.

Maps the human readable resize method names to the resample engine's
identifiers. "Automatic" is a sentinel meaning the engine picks the filter.
"""

from PIL import Image
from pydantic import BaseModel, ConfigDict

from drawable_export.errors import UnknownResizeMethodError

AUTO = "automatic"


class ResizeMethod(BaseModel):
    """A registered resample algorithm."""

    model_config = ConfigDict(frozen=True)

    name: str
    engine_id: str

    @property
    def is_auto(self) -> bool:
        return self.engine_id == AUTO


RESIZE_METHODS = {
    "automatic": ResizeMethod(name="Automatic", engine_id=AUTO),
    "nearest_neighbour": ResizeMethod(name="Nearest Neighbour", engine_id="Nrst"),
    "bilinear": ResizeMethod(name="Bilinear", engine_id="Blnr"),
    "bicubic": ResizeMethod(name="Bicubic", engine_id="Bcbc"),
    "bicubic_smoother": ResizeMethod(name="Bicubic Smoother", engine_id="bicubicSmoother"),
    "bicubic_sharper": ResizeMethod(name="Bicubic Sharper", engine_id="bicubicSharper"),
}

# Pillow filter used for each engine id
ENGINE_FILTERS = {
    "Nrst": Image.Resampling.NEAREST,
    "Blnr": Image.Resampling.BILINEAR,
    "Bcbc": Image.Resampling.BICUBIC,
    "bicubicSmoother": Image.Resampling.LANCZOS,
    "bicubicSharper": Image.Resampling.HAMMING,
}


def _slug(value):
    return "_".join(str(value).strip().lower().replace("-", " ").split())


def get_resize_method(method):
    """
    Get a resize method by display name, engine id or slug.

    Args:
        method: ResizeMethod, "Bicubic Sharper", "bicubicSharper" or "bicubic_sharper"

    Returns:
        The registered ResizeMethod

    Raises:
        UnknownResizeMethodError: If nothing in the registry matches
    """
    if isinstance(method, ResizeMethod):
        return method

    slug = _slug(method)
    if slug in RESIZE_METHODS:
        return RESIZE_METHODS[slug]

    for registered in RESIZE_METHODS.values():
        if _slug(registered.name) == slug or registered.engine_id.lower() == slug:
            return registered

    known = ", ".join(m.name for m in RESIZE_METHODS.values())
    raise UnknownResizeMethodError(f"Unknown resize method '{method}' (expected one of: {known})")


def resample_filter(method, source_size, target_size):
    """
    Pick the Pillow resampling filter for a resize.

    Automatic uses LANCZOS when shrinking, BICUBIC when enlarging and
    NEAREST when the size does not change.
    """
    method = get_resize_method(method)
    if not method.is_auto:
        return ENGINE_FILTERS[method.engine_id]

    if target_size == source_size:
        return Image.Resampling.NEAREST
    if target_size[0] < source_size[0]:
        return Image.Resampling.LANCZOS
    return Image.Resampling.BICUBIC
