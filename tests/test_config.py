"""
Configuration Tests
===================

Tests for settings defaults, YAML loading and environment overrides.
"""

import logging
import os

import pytest
from pydantic import ValidationError

from monoview.config import Settings, load_config, setup_logging
from monoview.stream.sink import DEFAULT_WINDOW_NAME


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Run each test without MONOVIEW_* variables or a stray config.yaml."""
    for key in list(os.environ):
        if key.startswith("MONOVIEW_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


class TestSettings:
    """Tests for default values and validation."""
    
    def test_defaults(self):
        """Defaults match the reference viewer."""
        settings = load_config()
        
        assert settings.frame.width == 1000
        assert settings.frame.height == 400
        assert settings.monitor.report_interval_seconds == 1.0
        assert settings.producer.backend == "noise"
        assert settings.display.window_name == "PtGrey Live Feed"
        assert settings.display.window_name == DEFAULT_WINDOW_NAME
        assert settings.loop.max_frames == 0
    
    @pytest.mark.parametrize("data", [
        {"frame": {"width": 0}},
        {"frame": {"height": -5}},
        {"monitor": {"report_interval_seconds": 0}},
        {"producer": {"backend": "spinnaker"}},
        {"display": {"wait_key_ms": 0}},
        {"logging": {"format": "xml"}},
    ])
    def test_invalid_values_rejected(self, data):
        with pytest.raises(ValidationError):
            Settings.model_validate(data)


class TestLoadConfig:
    """Tests for YAML + environment layering."""
    
    def test_yaml_file(self, tmp_path):
        """Values are read from an explicit YAML path."""
        path = tmp_path / "viewer.yaml"
        path.write_text(
            "frame:\n"
            "  width: 640\n"
            "  height: 480\n"
            "producer:\n"
            "  backend: camera\n"
            "  device_index: 1\n"
        )
        
        settings = load_config(str(path))
        
        assert (settings.frame.width, settings.frame.height) == (640, 480)
        assert settings.producer.backend == "camera"
        assert settings.producer.device_index == 1
    
    def test_config_yaml_in_cwd(self, tmp_path):
        """config.yaml in the working directory is picked up."""
        (tmp_path / "config.yaml").write_text("monitor:\n  report_interval_seconds: 2.5\n")
        
        assert load_config().monitor.report_interval_seconds == 2.5
    
    def test_empty_yaml(self, tmp_path):
        """An empty file means defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")
        
        assert load_config(str(path)) == Settings()
    
    def test_missing_explicit_path(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))
    
    def test_env_overrides_yaml(self, tmp_path, monkeypatch):
        """Environment variables win over file values."""
        path = tmp_path / "viewer.yaml"
        path.write_text("frame:\n  width: 640\n  height: 480\n")
        monkeypatch.setenv("MONOVIEW_WIDTH", "320")
        monkeypatch.setenv("MONOVIEW_REPORT_INTERVAL", "0.5")
        monkeypatch.setenv("MONOVIEW_SEED", "42")
        monkeypatch.setenv("MONOVIEW_MAX_FRAMES", "100")
        monkeypatch.setenv("MONOVIEW_LOG_LEVEL", "DEBUG")
        
        settings = load_config(str(path))
        
        assert settings.frame.width == 320
        assert settings.frame.height == 480
        assert settings.monitor.report_interval_seconds == 0.5
        assert settings.producer.seed == 42
        assert settings.loop.max_frames == 100
        assert settings.logging.level == "DEBUG"
    
    def test_env_value_validated(self, monkeypatch):
        monkeypatch.setenv("MONOVIEW_HEIGHT", "0")
        with pytest.raises(ValidationError):
            load_config()


class TestSetupLogging:
    """Tests for logging configuration."""
    
    def test_sets_root_level(self, monkeypatch):
        captured = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
        
        setup_logging(Settings.model_validate({"logging": {"level": "warning", "format": "json"}}))
        
        assert captured["level"] == logging.WARNING
        assert captured["format"].startswith('{"time"')
