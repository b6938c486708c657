"""Tests for the gallery-builder command line."""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from gallery_builder.cli import main


@pytest.fixture(autouse=True)
def mock_setup_logging():
    """Keep the CLI from replacing pytest's log handlers."""
    with patch("gallery_builder.cli.setup_logging") as mock_setup:
        yield mock_setup


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestCli:
    """Tests for the main command."""

    def test_default_layout(self, runner, tmp_path, monkeypatch, make_image):
        monkeypatch.chdir(tmp_path)
        make_image(tmp_path / "public" / "photos" / "travel" / "paris.jpg")

        result = runner.invoke(main, [])

        assert result.exit_code == 0, result.output
        assert "Photos: 1" in result.output
        assert "Travel" in result.output
        manifest = json.loads((tmp_path / "src" / "photos.json").read_text())
        assert manifest[0]["src"] == "/photos/travel/paris.jpg"
        assert (tmp_path / "public" / "thumbnails" / "travel" / "paris.webp").is_file()

    def test_missing_photos_dir_is_clean(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        result = runner.invoke(main, [])

        assert result.exit_code == 0
        assert "Photos: 0" in result.output
        assert json.loads((tmp_path / "src" / "photos.json").read_text()) == []

    def test_path_options(self, runner, tmp_path, make_image):
        make_image(tmp_path / "in" / "a.png")

        result = runner.invoke(main, [
            "--photos-dir", str(tmp_path / "in"),
            "--previews-dir", str(tmp_path / "out"),
            "--manifest", str(tmp_path / "gallery.json"),
        ])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "a.webp").is_file()
        assert json.loads((tmp_path / "gallery.json").read_text())[0]["thumbnail"] == "/thumbnails/a.webp"

    def test_config_paths_relative_to_config_file(self, runner, tmp_path, make_image):
        site = tmp_path / "site"
        make_image(site / "images" / "a.jpg")
        config_file = site / "gallery.yaml"
        config_file.write_text(
            "preview:\n"
            "  width: 20\n"
            "paths:\n"
            "  photos_dir: images\n"
            "  previews_dir: previews\n"
            "  manifest_file: data/photos.json\n"
            "  previews_url: /previews\n"
        )

        result = runner.invoke(main, ["--config", str(config_file)])

        assert result.exit_code == 0, result.output
        manifest = json.loads((site / "data" / "photos.json").read_text())
        assert manifest[0]["thumbnail"] == "/previews/a.webp"
        assert (site / "previews" / "a.webp").is_file()

    def test_invalid_config(self, runner, tmp_path):
        config_file = tmp_path / "gallery.yaml"
        config_file.write_text("preview:\n  quality: 0\n")

        result = runner.invoke(main, ["--config", str(config_file)])

        assert result.exit_code == 1
        assert "Could not load config" in result.output

    def test_dry_run(self, runner, tmp_path, monkeypatch, make_image):
        monkeypatch.chdir(tmp_path)
        make_image(tmp_path / "public" / "photos" / "a.jpg")

        result = runner.invoke(main, ["--dry-run"])

        assert result.exit_code == 0
        assert "Dry run" in result.output
        assert not (tmp_path / "src" / "photos.json").exists()

    def test_fatal_error_exits_nonzero(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        with patch("gallery_builder.cli.GalleryAssembler.build", side_effect=OSError("disk full")):
            result = runner.invoke(main, [])

        assert result.exit_code == 1

    def test_unwritable_preview_tree_exits_nonzero(self, runner, tmp_path, monkeypatch, make_image):
        monkeypatch.chdir(tmp_path)
        make_image(tmp_path / "public" / "photos" / "a.jpg")
        (tmp_path / "public" / "thumbnails").write_text("not a directory")

        result = runner.invoke(main, [])

        assert result.exit_code == 1
        assert not (tmp_path / "src" / "photos.json").exists()

    @pytest.mark.parametrize("flag,level", [("--verbose", "DEBUG"), ("--quiet", "WARNING"), (None, "INFO")])
    def test_log_level(self, runner, tmp_path, monkeypatch, mock_setup_logging, flag, level):
        monkeypatch.chdir(tmp_path)

        runner.invoke(main, [flag] if flag else [])

        assert mock_setup_logging.call_args.args[0] == level
