"""
Export job and report model tests.
"""

import pytest

from drawable_export.errors import InvalidDensityError, UnknownResizeMethodError
from drawable_export.models import ExportJob, ExportReport, ItemResult, ItemStatus, OutputArtifact
from drawable_export.naming import NamePolicy


class TestExportJob:
    """Export job validation"""

    def test_defaults(self):
        job = ExportJob(destination_root="res")
        assert job.source_density.name == "xxhdpi"
        assert [tier.name for tier in job.target_tiers] == ["mdpi", "hdpi", "xhdpi", "xxhdpi"]
        assert job.resize_method.name == "Automatic"
        assert job.scale_styles is True
        assert job.trim is False
        assert job.name_policy == NamePolicy.WHITESPACE

    def test_names_are_resolved(self):
        job = ExportJob(
            destination_root="res",
            source_density="XHDPI",
            target_tiers="xxhdpi, ldpi",
            resize_method="bicubic_smoother",
            name_policy="resource",
        )
        assert job.source_density.scale_factor == 2.0
        assert [tier.name for tier in job.target_tiers] == ["ldpi", "xxhdpi"]
        assert job.resize_method.engine_id == "bicubicSmoother"
        assert job.name_policy == NamePolicy.RESOURCE

    def test_invalid_density(self):
        with pytest.raises(InvalidDensityError):
            ExportJob(destination_root="res", source_density="hd")

    def test_invalid_resize_method(self):
        with pytest.raises(UnknownResizeMethodError):
            ExportJob(destination_root="res", resize_method="magic")

    def test_for_item(self):
        job = ExportJob(destination_root="res", base_name="dialog name", trim=True)
        item_job = job.for_item("Layer 1")
        assert item_job.base_name == "Layer 1"
        assert item_job.trim is True
        assert job.base_name == "dialog name"


class TestExportReport:
    """Report aggregation"""

    def test_failures_and_artifacts(self):
        artifact = OutputArtifact(tier="mdpi", path="/res/drawable-mdpi/a.png", width=10, height=10)
        report = ExportReport(
            destination_root="/res",
            items=[
                ItemResult(layer_name="a", base_name="a", status=ItemStatus.EXPORTED, artifacts=[artifact]),
                ItemResult(layer_name="b", base_name="b", status=ItemStatus.FAILED, error="empty"),
            ],
        )
        assert not report.succeeded
        assert [item.layer_name for item in report.failures] == ["b"]
        assert report.artifacts == [artifact]
