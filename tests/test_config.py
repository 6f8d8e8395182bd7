"""
Tests for config module - validation, dict round-trips and file loading.

Run with: pytest tests/test_config.py -v
"""

import json

import pytest
import yaml

from sketches.config import (
    ConfigManager,
    IsoConfig,
    LatticeConfig,
    SketchConfig,
    TransitConfig,
)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestValidation:
    def test_defaults_are_valid(self):
        valid, error = SketchConfig().validate()
        assert valid is True, f"Default config should be valid: {error}"

    def test_bad_size(self):
        valid, error = SketchConfig(size="wide").validate()
        assert valid is False
        assert "size" in error

    def test_bad_format(self):
        valid, error = SketchConfig(format="svg").validate()
        assert valid is False
        assert "format" in error

    def test_bad_encoding(self):
        valid, error = SketchConfig(encoding="bgr").validate()
        assert valid is False
        assert "encoding" in error

    def test_empty_range(self):
        config = SketchConfig(transit=TransitConfig(nx_range=(10, 10)))
        valid, error = config.validate()
        assert valid is False
        assert error.startswith("transit:")
        assert "nx_range" in error

    def test_zero_lower_bound(self):
        valid, error = SketchConfig(lattice=LatticeConfig(ny_range=(0, 5))).validate()
        assert valid is False
        assert "ny_range" in error

    def test_unknown_policy(self):
        valid, error = SketchConfig(transit=TransitConfig(policy="zigzag")).validate()
        assert valid is False
        assert "policy" in error

    def test_density_out_of_range(self):
        valid, error = SketchConfig(transit=TransitConfig(density=1.5)).validate()
        assert valid is False
        assert "density" in error

    def test_iso_fill_chance(self):
        assert IsoConfig(fill_chance=2.0).validate() is not None

    def test_family_lookup(self):
        config = SketchConfig()
        assert config.family("transit") is config.transit


# ---------------------------------------------------------------------------
# Dict round-trips
# ---------------------------------------------------------------------------

class TestRoundTrip:
    def test_to_dict_from_dict(self):
        config = SketchConfig(size="800x800", transit=TransitConfig(nx_range=(5, 9), policy="bernoulli"))
        restored = SketchConfig.from_dict(config.to_dict())
        assert restored == config
        assert restored.transit.nx_range == (5, 9)

    def test_to_dict_uses_lists(self):
        data = SketchConfig().to_dict()
        assert data["transit"]["nx_range"] == [20, 50]

    def test_partial_dict_keeps_defaults(self):
        config = SketchConfig.from_dict({"size": "100x100", "series": {"fill_alpha": 0.3}})
        assert config.size == "100x100"
        assert config.series.fill_alpha == 0.3
        assert config.series.nw_range == (5, 40)
        assert config.themes == "themes.bin"

    def test_unknown_keys_ignored(self):
        config = SketchConfig.from_dict({"colour": "red", "burst": {"spikes": 3}})
        assert config == SketchConfig()

    def test_none(self):
        assert SketchConfig.from_dict(None) == SketchConfig()


# ---------------------------------------------------------------------------
# ConfigManager
# ---------------------------------------------------------------------------

class TestConfigManager:
    def test_missing_file_gives_defaults(self, tmp_path):
        manager = ConfigManager(tmp_path / "missing.yaml")
        assert manager.load() == SketchConfig()

    def test_yaml_save_and_load(self, tmp_path):
        path = tmp_path / "sketches.yaml"
        manager = ConfigManager(path)
        config = SketchConfig(size="640x480", count=3)
        assert manager.save(config) is True

        data = yaml.safe_load(path.read_text())
        assert data["size"] == "640x480"

        loaded = ConfigManager(path).load()
        assert loaded == config

    def test_json(self, tmp_path):
        path = tmp_path / "sketches.json"
        path.write_text(json.dumps({"format": "pdf", "lattice": {"dash": [4, 4]}}))
        config = ConfigManager(path).load()
        assert config.format == "pdf"
        assert config.lattice.dash == (4, 4)

    def test_invalid_config_falls_back(self, tmp_path, capsys):
        path = tmp_path / "sketches.yaml"
        path.write_text("size: nope\n")
        config = ConfigManager(path).load()
        assert config == SketchConfig()
        assert "[Config]" in capsys.readouterr().err

    def test_malformed_yaml_falls_back(self, tmp_path, capsys):
        path = tmp_path / "sketches.yaml"
        path.write_text("size: [unclosed\n")
        assert ConfigManager(path).load() == SketchConfig()
        assert "[Config]" in capsys.readouterr().err

    def test_wrong_shape_falls_back(self, tmp_path, capsys):
        path = tmp_path / "sketches.yaml"
        path.write_text("- just\n- a list\n")
        assert ConfigManager(path).load() == SketchConfig()
        assert "[Config]" in capsys.readouterr().err

    def test_save_invalid_refused(self, tmp_path, capsys):
        path = tmp_path / "sketches.yaml"
        assert ConfigManager(path).save(SketchConfig(count=0)) is False
        assert not path.exists()

    def test_load_is_cached(self, tmp_path):
        path = tmp_path / "sketches.yaml"
        manager = ConfigManager(path)
        first = manager.load()
        ConfigManager(path).save(SketchConfig(count=5))
        assert manager.load() is first
        assert manager.reload().count == 5
