"""
Android density table and scale calculations.

Each tier carries a scale factor relative to the mdpi baseline (160 dpi).
Target widths are derived from the source artwork width and the ratio of the
target tier's factor to the source tier's factor.
"""

import logging
import math

from pydantic import BaseModel, ConfigDict, Field

from drawable_export.config import FOLDER_PREFIX
from drawable_export.errors import InvalidDensityError

logger = logging.getLogger("drawable_export.densities")


class DensityTier(BaseModel):
    """A named density bucket."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Tier name, e.g. 'xhdpi'")
    scale_factor: float = Field(gt=0, description="Scale relative to mdpi")
    folder_suffix: str = Field(description="Suffix of the drawable-* folder")

    @property
    def folder_name(self) -> str:
        return f"{FOLDER_PREFIX}{self.folder_suffix}"


# Ordered by scale factor
DENSITY_TIERS = {
    "ldpi": DensityTier(name="ldpi", scale_factor=0.75, folder_suffix="ldpi"),
    "mdpi": DensityTier(name="mdpi", scale_factor=1.0, folder_suffix="mdpi"),
    "hdpi": DensityTier(name="hdpi", scale_factor=1.5, folder_suffix="hdpi"),
    "xhdpi": DensityTier(name="xhdpi", scale_factor=2.0, folder_suffix="xhdpi"),
    "xxhdpi": DensityTier(name="xxhdpi", scale_factor=3.0, folder_suffix="xxhdpi"),
    "xxxhdpi": DensityTier(name="xxxhdpi", scale_factor=4.0, folder_suffix="xxxhdpi"),
}


def get_tier(tier):
    """
    Look up a density tier.

    Args:
        tier: Tier name (case-insensitive) or a DensityTier already in the table

    Returns:
        The registered DensityTier

    Raises:
        InvalidDensityError: If the tier is not in the density table
    """
    if isinstance(tier, DensityTier):
        registered = DENSITY_TIERS.get(tier.name)
        if registered != tier:
            raise InvalidDensityError(f"Density tier not in registry: {tier.name}")
        return registered

    key = str(tier).strip().lower()
    if key not in DENSITY_TIERS:
        known = ", ".join(DENSITY_TIERS)
        raise InvalidDensityError(f"Unknown density '{tier}' (expected one of: {known})")
    return DENSITY_TIERS[key]


def resolve_tiers(names):
    """
    Resolve a list of tier names into DensityTiers ordered by scale factor.

    Duplicates are dropped.
    """
    tiers = {}
    for name in names:
        tier = get_tier(name)
        tiers[tier.name] = tier

    if not tiers:
        raise InvalidDensityError("At least one target density is required")
    return sorted(tiers.values(), key=lambda t: t.scale_factor)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def width_for_tier(source_width: int, source_density, target_tier) -> int:
    """
    Compute the pixel width of an artwork at a target density.

    Args:
        source_width: Width of the artwork in pixels at the source density
        source_density: DensityTier (or tier name) the artwork was drawn at
        target_tier: DensityTier (or tier name) to compute the width for

    Returns:
        round_half_up(source_width * target.scale_factor / source.scale_factor),
        never less than 1 for a non-empty source

    Raises:
        InvalidDensityError: If either tier is not in the density table
    """
    source = get_tier(source_density)
    target = get_tier(target_tier)

    if source == target:
        return source_width

    width = round_half_up(source_width * target.scale_factor / source.scale_factor)
    if source_width > 0:
        width = max(1, width)

    logger.debug(f"{source_width}px @ {source.name} -> {width}px @ {target.name}")
    return width


def widths_for_tiers(source_width, source_density, target_tiers):
    """Map each target tier name to its pixel width."""
    return {
        tier.name: width_for_tier(source_width, source_density, tier)
        for tier in resolve_tiers(target_tiers)
    }
