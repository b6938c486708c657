"""
Test configuration management.
"""

from pathlib import Path

import pytest

from gallery_builder.config import Config, PreviewConfig, load_config


class TestConfig:
    """Test configuration classes."""

    def test_default_config(self):
        """Test default configuration values."""
        config = Config()

        assert config.preview.width == 600
        assert config.preview.quality == 80
        assert config.preview.format == "webp"

        assert config.original.max_dimension == 2500
        assert config.original.quality == 90
        assert config.original.keep_metadata is True

        assert config.paths.photos_dir == "public/photos"
        assert config.paths.previews_dir == "public/thumbnails"
        assert config.paths.manifest_file == "src/photos.json"
        assert config.paths.photos_url == "/photos"
        assert config.paths.previews_url == "/thumbnails"

    def test_config_from_dict_keeps_defaults(self):
        """Test that unspecified values keep their defaults."""
        config = Config.from_dict({
            "preview": {"width": 400},
            "original": {"keep_metadata": False},
        })

        assert config.preview.width == 400
        assert config.preview.quality == 80
        assert config.original.keep_metadata is False
        assert config.original.max_dimension == 2500

    def test_config_from_dict_unknown_key(self):
        """Test that typos in config keys are rejected."""
        with pytest.raises(TypeError):
            Config.from_dict({"preview": {"widht": 400}})

    def test_config_to_dict(self):
        """Test converting config to dictionary."""
        config_dict = Config().to_dict()

        assert config_dict["preview"]["width"] == 600
        assert config_dict["original"]["max_dimension"] == 2500
        assert config_dict["paths"]["photos_url"] == "/photos"

    def test_preview_extension(self):
        """Test preview extension derived from format."""
        assert PreviewConfig().extension == ".webp"
        assert PreviewConfig(format="JPEG").extension == ".jpeg"

    def test_resolve_paths(self, tmp_path):
        """Test relative paths resolve against the base directory."""
        config = Config.from_dict({"paths": {"manifest_file": str(tmp_path / "out.json")}})

        paths = config.resolve_paths(tmp_path / "site")

        assert paths.photos_dir == tmp_path / "site" / "public" / "photos"
        assert paths.previews_dir == tmp_path / "site" / "public" / "thumbnails"
        assert paths.manifest_file == tmp_path / "out.json"


class TestValidation:
    """Test Config.validate()."""

    def test_defaults_are_valid(self):
        Config().validate()

    @pytest.mark.parametrize("data", [
        {"preview": {"width": 0}},
        {"preview": {"quality": 101}},
        {"original": {"quality": 0}},
        {"original": {"max_dimension": -1}},
        {"preview": {"format": "nope"}},
    ])
    def test_invalid_values(self, data):
        with pytest.raises(ValueError):
            Config.from_dict(data).validate()


class TestLoadConfig:
    """Test loading YAML config files."""

    def test_load_yaml(self, tmp_path):
        """Test loading settings from a YAML file."""
        config_file = tmp_path / "gallery.yaml"
        config_file.write_text(
            "preview:\n"
            "  width: 320\n"
            "original:\n"
            "  max_dimension: 1024\n"
            "log_level: DEBUG\n"
        )

        config = load_config(config_file)

        assert config.preview.width == 320
        assert config.original.max_dimension == 1024
        assert config.log_level == "DEBUG"

    def test_load_empty_yaml(self, tmp_path):
        """Test that an empty file yields defaults."""
        config_file = tmp_path / "gallery.yaml"
        config_file.write_text("")

        config = load_config(config_file)

        assert config == Config()

    def test_missing_explicit_file(self, tmp_path):
        """Test that a missing explicit config file raises."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")

    def test_search_path_fallback(self, tmp_path, monkeypatch):
        """Test defaults are used when no config file is found."""
        monkeypatch.chdir(tmp_path)

        assert load_config() == Config()

    def test_search_path_finds_gallery_yaml(self, tmp_path, monkeypatch):
        """Test gallery.yaml in the working directory is picked up."""
        monkeypatch.chdir(tmp_path)
        Path("gallery.yaml").write_text("preview:\n  quality: 60\n")

        assert load_config().preview.quality == 60

    def test_invalid_yaml_values(self, tmp_path):
        """Test that invalid values in a file are rejected."""
        config_file = tmp_path / "gallery.yaml"
        config_file.write_text("original:\n  quality: 500\n")

        with pytest.raises(ValueError):
            load_config(config_file)
