"""
Unit tests for iconset.project_config module.

Tests:
- Configuration dataclasses
- JSON serialization/deserialization
- Config file search and loading
- Config merging
"""

import json

import pytest

from iconset.collection.optimize import OPTIMIZABLE_PROPS
from iconset.project_config import (
    CONFIG_FILENAME,
    CacheConfig,
    CollectionConfig,
    IconsetConfig,
    RenderConfig,
    ScriptConfig,
    create_sample_config,
    find_config_file,
    load_config,
    merge_configs,
)


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Run with empty working and home directories."""
    cwd = tmp_path / "cwd"
    home = tmp_path / "home"
    cwd.mkdir()
    home.mkdir()
    monkeypatch.chdir(cwd)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("USERPROFILE", str(home))
    return cwd, home


class TestSections:
    """Tests for the section dataclasses."""

    def test_render_defaults(self):
        """Icons are 1em high with two-decimal precision."""
        config = RenderConfig()
        assert config.default_height == "1em"
        assert config.precision == 100
        assert config.add_extra is False
        assert config.id_prefix == "svg-icon"

    def test_script_defaults(self):
        """Script output is compact and unoptimized."""
        config = ScriptConfig()
        assert config.callback == "SimpleSVG.addCollection"
        assert config.optimize is False
        assert config.pretty is False

    def test_cache_defaults(self):
        """The cache is off by default."""
        config = CacheConfig()
        assert config.enabled is False
        assert config.directory == ""

    def test_collection_defaults_are_independent(self):
        """Each config gets its own props list."""
        first = CollectionConfig()
        first.optimize_props.append("rotate")
        assert CollectionConfig().optimize_props == list(OPTIMIZABLE_PROPS)


class TestIconsetConfig:
    """Tests for IconsetConfig serialization."""

    def test_to_dict_sections(self):
        """Every section is serialized."""
        data = IconsetConfig().to_dict()
        assert set(data) == {"render", "script", "cache", "collection"}
        assert data["render"]["default_height"] == "1em"

    def test_json_roundtrip(self):
        """to_json/from_json keep changed values."""
        config = IconsetConfig()
        config.render.precision = 1000
        config.script.pretty = True
        restored = IconsetConfig.from_json(config.to_json())
        assert restored == config

    def test_from_dict_partial(self):
        """Missing sections and keys keep defaults."""
        config = IconsetConfig.from_dict({"script": {"callback": "Iconify.addCollection"}})
        assert config.script.callback == "Iconify.addCollection"
        assert config.script.pretty is False
        assert config.render == RenderConfig()

    def test_from_dict_ignores_unknown(self):
        """Unknown sections, keys and comments are skipped."""
        config = IconsetConfig.from_dict({
            "_comment": "x",
            "unknown": {"a": 1},
            "render": {"_comment": "y", "nonexistent": 5, "precision": 10},
            "cache": "not a section",
        })
        assert config.render.precision == 10
        assert not hasattr(config.render, "nonexistent")
        assert config.cache == CacheConfig()

    def test_save_and_load(self, tmp_path):
        """Saved files load back equal."""
        path = tmp_path / CONFIG_FILENAME
        config = IconsetConfig()
        config.cache.enabled = True
        config.save(path)
        assert IconsetConfig.load(path) == config

    def test_load_missing(self, tmp_path):
        """Loading a missing file raises."""
        with pytest.raises(FileNotFoundError):
            IconsetConfig.load(tmp_path / "missing.json")


class TestFindConfigFile:
    """Tests for find_config_file."""

    def test_explicit(self, tmp_path, isolated_dirs):
        """An existing explicit path is used."""
        path = tmp_path / "custom.json"
        path.write_text("{}", encoding='utf-8')
        assert find_config_file(explicit_config=path) == path

    def test_explicit_missing_falls_back(self, tmp_path, isolated_dirs):
        """A missing explicit path falls back to the search."""
        cwd, _ = isolated_dirs
        (cwd / CONFIG_FILENAME).write_text("{}", encoding='utf-8')
        assert find_config_file(explicit_config=tmp_path / "missing.json") == cwd / CONFIG_FILENAME

    def test_collection_directory_first(self, tmp_path, isolated_dirs):
        """The collection's directory beats the working directory."""
        cwd, _ = isolated_dirs
        icons = tmp_path / "icons"
        icons.mkdir()
        (icons / CONFIG_FILENAME).write_text("{}", encoding='utf-8')
        (cwd / CONFIG_FILENAME).write_text("{}", encoding='utf-8')
        assert find_config_file(icons / "fa.json") == icons / CONFIG_FILENAME

    def test_home(self, isolated_dirs):
        """The home directory is searched last."""
        _, home = isolated_dirs
        (home / CONFIG_FILENAME).write_text("{}", encoding='utf-8')
        assert find_config_file() == home / CONFIG_FILENAME

    def test_not_found(self, isolated_dirs):
        """None when no file exists."""
        assert find_config_file() is None


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, isolated_dirs):
        """Defaults are returned when nothing is found."""
        assert load_config() == IconsetConfig()

    def test_found_file(self, isolated_dirs):
        """Values from the found file are applied."""
        cwd, _ = isolated_dirs
        (cwd / CONFIG_FILENAME).write_text(
            json.dumps({"render": {"default_height": "24px"}}), encoding='utf-8')
        assert load_config().render.default_height == "24px"

    def test_invalid_file(self, isolated_dirs):
        """Broken JSON falls back to defaults."""
        cwd, _ = isolated_dirs
        (cwd / CONFIG_FILENAME).write_text("{broken", encoding='utf-8')
        assert load_config() == IconsetConfig()


class TestMergeConfigs:
    """Tests for merge_configs."""

    def test_override_changed_values(self):
        """Non-default override values win."""
        base = IconsetConfig()
        base.render.precision = 1000
        base.script.callback = "base"
        override = IconsetConfig()
        override.script.callback = "override"

        merged = merge_configs(base, override)

        assert merged.render.precision == 1000
        assert merged.script.callback == "override"

    def test_inputs_not_modified(self):
        """Merging builds a new config."""
        base = IconsetConfig()
        override = IconsetConfig()
        override.cache.enabled = True
        merge_configs(base, override)
        assert base.cache.enabled is False


class TestCreateSampleConfig:
    """Tests for create_sample_config."""

    def test_sample_loads(self, tmp_path):
        """The sample file is valid and loads as defaults."""
        path = tmp_path / CONFIG_FILENAME
        create_sample_config(path)
        data = json.loads(path.read_text(encoding='utf-8'))
        assert "_comment" in data["render"]
        assert IconsetConfig.load(path) == IconsetConfig()
