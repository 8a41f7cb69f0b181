"""Tests for SweepConfig and config file loading."""

import json

import pytest

from csssweep.config import DEFAULT_STRIP_PATTERN, SweepConfig, load_config
from csssweep.errors import ConfigError


class TestDefaults:
    def test_defaults(self):
        config = SweepConfig()
        assert config.nest_level_threshold == 3
        assert config.remove_regex is None
        assert config.remove_pattern is None
        assert config.strip_pattern == DEFAULT_STRIP_PATTERN
        assert config.compress is True
        assert config.jobs == 1

    def test_frozen(self):
        with pytest.raises(AttributeError):
            SweepConfig().jobs = 2  # type: ignore[misc]


class TestValidation:
    def test_invalid_remove_regex(self):
        with pytest.raises(ConfigError):
            SweepConfig(remove_regex="(")

    def test_negative_threshold(self):
        with pytest.raises(ConfigError):
            SweepConfig(nest_level_threshold=-1)

    def test_zero_jobs(self):
        with pytest.raises(ConfigError):
            SweepConfig(jobs=0)

    @pytest.mark.parametrize(
        "field, value",
        [
            ("nest_level_threshold", "5"),
            ("max_extract_depth", 2.5),
            ("jobs", True),
            ("compress", "yes"),
            ("remove_regex", 42),
            ("css_file_glob", ["a.css"]),
        ],
    )
    def test_wrong_type(self, field, value):
        with pytest.raises(ConfigError, match=field):
            SweepConfig(**{field: value})

    def test_string_threshold_in_file(self, tmp_path):
        path = tmp_path / "csssweep.json"
        path.write_text(json.dumps({"nestLevelThreshold": "5"}), encoding="utf-8")
        with pytest.raises(ConfigError, match="nest_level_threshold must be an integer"):
            load_config(path)


class TestFromDict:
    def test_camel_case_keys(self):
        config = SweepConfig.from_dict({
            "cssFileGlob": "dist/**/*.css",
            "cssFileGlobIgnore": "dist/vendor/**",
            "filesToSearchGlob": "templates/**/*.html",
            "removeRegex": "^\\.",
            "nestLevelThreshold": 4,
        })
        assert config.css_file_glob == "dist/**/*.css"
        assert config.css_file_glob_ignore == ("dist/vendor/**",)
        assert config.files_to_search_glob == "templates/**/*.html"
        assert config.remove_pattern.search(".x")
        assert config.nest_level_threshold == 4

    def test_snake_case_keys(self):
        config = SweepConfig.from_dict({"files_to_search_glob_ignore": ["a", "b"]})
        assert config.files_to_search_glob_ignore == ("a", "b")

    def test_unknown_key(self):
        with pytest.raises(ConfigError):
            SweepConfig.from_dict({"colour": "red"})


class TestMerged:
    def test_none_overrides_ignored(self):
        config = SweepConfig(css_file_glob="a.css").merged(css_file_glob=None, jobs=2)
        assert config.css_file_glob == "a.css"
        assert config.jobs == 2

    def test_empty_ignore_keeps_base(self):
        base = SweepConfig(css_file_glob_ignore=("x",))
        assert base.merged(css_file_glob_ignore=()).css_file_glob_ignore == ("x",)

    def test_ignore_override(self):
        merged = SweepConfig().merged(css_file_glob_ignore=["y"])
        assert merged.css_file_glob_ignore == ("y",)


class TestLoadConfig:
    def test_load(self, tmp_path):
        path = tmp_path / "csssweep.json"
        path.write_text(json.dumps({"cssFileGlob": "*.css"}), encoding="utf-8")
        assert load_config(path).css_file_glob == "*.css"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "csssweep.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "csssweep.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(tmp_path / "nope.json")
