"""
Tests for configuration loading.
"""

import tempfile
from pathlib import Path

import pytest

from edgar_pipeline.config import (
    PipelineConfig,
    apply_env_overrides,
    deep_merge,
    load_config,
)


BASE_CONFIG = Path(__file__).parent.parent / "configs" / "base.yaml"


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_merge(self):
        """Test that nested dicts are merged, not replaced."""
        base = {"edgar": {"timeout": 30, "retries": 3}, "parse": {"encoding": "utf-8"}}
        override = {"edgar": {"timeout": 5}}

        result = deep_merge(base, override)

        assert result == {"edgar": {"timeout": 5, "retries": 3}, "parse": {"encoding": "utf-8"}}
        # Inputs untouched
        assert base["edgar"]["timeout"] == 30


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults(self):
        """Test configuration without a file."""
        config = load_config(environ={})

        assert isinstance(config, PipelineConfig)
        assert config.edgar.retries == 3
        assert config.parse.encoding == "utf-8"
        assert config.logging.level == "INFO"

    def test_base_yaml_matches_defaults(self):
        """Test that the shipped base config loads cleanly."""
        config = load_config(BASE_CONFIG, environ={})
        assert config == PipelineConfig()

    def test_yaml_overrides(self):
        """Test that file values override defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "custom.yaml"
            path.write_text("edgar:\n  timeout: 5\nlogging:\n  level: DEBUG\n", encoding="utf-8")

            config = load_config(path, environ={})

        assert config.edgar.timeout == 5
        assert config.edgar.retries == 3
        assert config.logging.level == "DEBUG"

    def test_empty_yaml(self):
        """Test that an empty file yields the defaults."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "empty.yaml"
            path.write_text("", encoding="utf-8")

            config = load_config(path, environ={})

        assert config == PipelineConfig()

    def test_missing_file(self):
        """Test that a missing config file raises."""
        with pytest.raises(FileNotFoundError):
            load_config("does/not/exist.yaml", environ={})

    def test_env_overrides(self):
        """Test environment variable overrides."""
        config = load_config(environ={
            "EDGAR_USER_AGENT": "Env Co env@test.com",
            "EDGAR_LOG_LEVEL": "WARNING",
        })

        assert config.edgar.user_agent == "Env Co env@test.com"
        assert config.logging.level == "WARNING"

    def test_env_beats_file(self):
        """Test that environment overrides win over file values."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "custom.yaml"
            path.write_text("edgar:\n  user_agent: File Co file@test.com\n", encoding="utf-8")

            config = load_config(path, environ={"EDGAR_USER_AGENT": "Env Co env@test.com"})

        assert config.edgar.user_agent == "Env Co env@test.com"

    def test_empty_env_ignored(self):
        """Test that empty environment values do not override."""
        result = apply_env_overrides({"edgar": {"user_agent": "keep"}}, {"EDGAR_USER_AGENT": ""})
        assert result["edgar"]["user_agent"] == "keep"
