"""
Command-line interface tests.
"""

import os

import pytest

from drawable_export.cli import (
    EXIT_ITEM_FAILED,
    EXIT_OK,
    EXIT_SETUP_FAILED,
    build_job,
    build_parser,
    run,
)


@pytest.fixture
def source(tmp_path, make_artwork):
    path = tmp_path / "Home Icon.png"
    make_artwork(60, 60, (10, 10, 50, 50)).save(path)
    return str(path)


@pytest.fixture
def layers_dir(tmp_path, make_artwork):
    folder = tmp_path / "layers"
    folder.mkdir()
    make_artwork(20, 20, (0, 0, 20, 20)).save(folder / "Alpha.png")
    make_artwork(20, 20, (0, 0, 0, 0)).save(folder / "Blank.png")
    return str(folder)


class TestBuildJob:
    """Arguments to export job"""

    def test_defaults(self, tmp_path):
        args = build_parser().parse_args(["icon.png", "-o", str(tmp_path)])
        job = build_job(args)
        assert job.source_density.name == "xxhdpi"
        assert [tier.name for tier in job.target_tiers] == ["mdpi", "hdpi", "xhdpi", "xxhdpi"]
        assert job.scale_styles is True

    def test_legacy_preset(self, tmp_path):
        args = build_parser().parse_args(["icon.png", "-o", str(tmp_path), "--legacy"])
        job = build_job(args)
        assert job.source_density.name == "mdpi"
        assert [tier.name for tier in job.target_tiers] == ["ldpi", "mdpi", "hdpi", "xhdpi"]

    def test_legacy_respects_explicit_density(self, tmp_path):
        args = build_parser().parse_args(["icon.png", "-o", str(tmp_path), "--legacy", "--density", "HDPI"])
        assert build_job(args).source_density.name == "hdpi"

    def test_options(self, tmp_path):
        args = build_parser().parse_args(
            [
                "icon.png",
                "-o",
                str(tmp_path),
                "--tiers",
                "hdpi,xxxhdpi",
                "--resize-method",
                "Nearest Neighbour",
                "--no-scale-styles",
                "--trim",
                "--name-policy",
                "resource",
            ]
        )
        job = build_job(args)
        assert [tier.name for tier in job.target_tiers] == ["hdpi", "xxxhdpi"]
        assert job.resize_method.engine_id == "Nrst"
        assert job.scale_styles is False
        assert job.trim is True


class TestRun:
    """End to end runs"""

    def test_single_layer(self, source, tmp_path):
        out = tmp_path / "res"
        status = run([source, "-o", str(out), "--density", "xhdpi", "--trim"])
        assert status == EXIT_OK
        for folder in ("drawable-mdpi", "drawable-hdpi", "drawable-xhdpi", "drawable-xxhdpi"):
            assert os.path.isfile(out / folder / "home_icon.png")

    def test_custom_name(self, source, tmp_path):
        out = tmp_path / "res"
        assert run([source, "-o", str(out), "--name", "Nav Home"]) == EXIT_OK
        assert os.path.isfile(out / "drawable-mdpi" / "nav_home.png")

    def test_all_layers_with_failure(self, layers_dir, tmp_path, capsys):
        out = tmp_path / "res"
        status = run([layers_dir, "-o", str(out), "--all-layers", "--trim", "--metadata"])
        assert status == EXIT_ITEM_FAILED
        printed = capsys.readouterr().out
        assert "OK      Alpha" in printed
        assert "FAILED  Blank: EmptyArtworkError" in printed
        assert os.path.isfile(out / "export_metadata.json")
        assert not os.path.exists(out / "drawable-mdpi" / "blank.png")

    def test_missing_source(self, tmp_path):
        assert run([str(tmp_path / "missing.png"), "-o", str(tmp_path)]) == EXIT_SETUP_FAILED

    def test_unknown_tier(self, source, tmp_path):
        assert run([source, "-o", str(tmp_path), "--tiers", "mdpi,tvdpi"]) == EXIT_SETUP_FAILED

    def test_output_required(self, source, monkeypatch):
        monkeypatch.setattr("drawable_export.cli.DEFAULT_OUTPUT_DIR", None)
        with pytest.raises(SystemExit) as excinfo:
            run([source])
        assert excinfo.value.code == 2

    def test_list_layers(self, layers_dir, capsys):
        assert run([layers_dir, "--list-layers"]) == EXIT_OK
        printed = capsys.readouterr().out
        assert "* Alpha" in printed
        assert "Blank" in printed
