"""
Pydantic models for export jobs and their results.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from drawable_export.config import (
    DEFAULT_RESIZE_METHOD,
    DEFAULT_SOURCE_DENSITY,
    DEFAULT_TARGET_TIERS,
)
from drawable_export.densities import DensityTier, get_tier, resolve_tiers
from drawable_export.naming import NamePolicy
from drawable_export.resize_methods import ResizeMethod, get_resize_method


class ExportJob(BaseModel):
    """Parameters for exporting one artwork item to every target density."""

    base_name: str = Field(default="", description="Name the output files are derived from")
    destination_root: str = Field(description="Folder receiving the drawable-* folders")
    source_density: DensityTier = Field(
        default_factory=lambda: get_tier(DEFAULT_SOURCE_DENSITY),
        description="Density the source artwork was drawn at",
    )
    target_tiers: List[DensityTier] = Field(
        default_factory=lambda: resolve_tiers(DEFAULT_TARGET_TIERS),
        description="Densities to export, smallest first",
    )
    resize_method: ResizeMethod = Field(
        default_factory=lambda: get_resize_method(DEFAULT_RESIZE_METHOD),
        description="Resample algorithm, or Automatic",
    )
    scale_styles: bool = Field(default=True, description="Scale layer styles with the image")
    trim: bool = Field(default=False, description="Trim transparent margins before resizing")
    name_policy: NamePolicy = Field(
        default=NamePolicy.WHITESPACE, description="File name normalization policy"
    )

    @field_validator("source_density", mode="before")
    @classmethod
    def _lookup_source_density(cls, value):
        return get_tier(value)

    @field_validator("target_tiers", mode="before")
    @classmethod
    def _lookup_target_tiers(cls, value):
        if isinstance(value, str):
            value = [name for name in value.split(",") if name.strip()]
        return resolve_tiers(value)

    @field_validator("resize_method", mode="before")
    @classmethod
    def _lookup_resize_method(cls, value):
        return get_resize_method(value)

    def for_item(self, base_name):
        """Copy of this job exporting under a different base name."""
        return self.model_copy(update={"base_name": base_name})


class OutputArtifact(BaseModel):
    """One PNG written for one density tier."""

    tier: str
    path: str
    width: int
    height: int


class ItemStatus(str, Enum):
    """Outcome of exporting one artwork item."""

    EXPORTED = "exported"
    FAILED = "failed"


class ItemResult(BaseModel):
    """Result of exporting one artwork item."""

    layer_name: str
    base_name: str
    file_name: Optional[str] = Field(default=None, description="Name the files were written under")
    status: ItemStatus
    artifacts: List[OutputArtifact] = Field(default_factory=list)
    error: Optional[str] = None
    error_type: Optional[str] = None


class ExportReport(BaseModel):
    """Per-item results of an export run."""

    destination_root: str
    started_at: datetime = Field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None
    items: List[ItemResult] = Field(default_factory=list)

    @property
    def failures(self) -> List[ItemResult]:
        return [item for item in self.items if item.status == ItemStatus.FAILED]

    @property
    def succeeded(self) -> bool:
        return not self.failures

    @property
    def artifacts(self) -> List[OutputArtifact]:
        return [artifact for item in self.items for artifact in item.artifacts]
