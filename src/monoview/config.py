"""
monoview Configuration
======================

This module handles configuration loading for the live viewer.

Configuration Sources (in order of precedence):
    1. Environment variables (highest priority)
    2. config.yaml file
    3. Default values (lowest priority)

Environment Variable Mapping:
    MONOVIEW_WIDTH           -> frame.width
    MONOVIEW_HEIGHT          -> frame.height
    MONOVIEW_REPORT_INTERVAL -> monitor.report_interval_seconds
    MONOVIEW_PRODUCER        -> producer.backend
    MONOVIEW_SEED            -> producer.seed
    MONOVIEW_DEVICE          -> producer.device_index
    MONOVIEW_WINDOW_NAME     -> display.window_name
    MONOVIEW_MAX_FRAMES      -> loop.max_frames
    MONOVIEW_LOG_LEVEL       -> logging.level
    MONOVIEW_LOG_FORMAT      -> logging.format

Example:
    from monoview.config import load_config
    
    settings = load_config()
    print(settings.frame.width, settings.frame.height)
"""

import os
import logging
from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field

from monoview.stream.sink import DEFAULT_WINDOW_NAME


logger = logging.getLogger(__name__)


# =============================================================================
# Configuration Models
# =============================================================================

class FrameConfig(BaseModel):
    """Frame geometry. Fixed for the lifetime of a stream."""
    
    width: int = Field(default=1000, gt=0, description="Frame width in pixels")
    height: int = Field(default=400, gt=0, description="Frame height in pixels")


class MonitorConfig(BaseModel):
    """Frame rate measurement configuration."""
    
    report_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Seconds between FPS reports",
    )


class ProducerConfig(BaseModel):
    """Frame source configuration."""
    
    backend: Literal["noise", "camera"] = Field(
        default="noise",
        description="Frame source: 'noise' or 'camera'",
    )
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for the noise producer (None = random)",
    )
    device_index: int = Field(
        default=0,
        ge=0,
        description="OpenCV capture device index for the camera producer",
    )


class DisplayConfig(BaseModel):
    """Display window configuration."""
    
    window_name: str = Field(default=DEFAULT_WINDOW_NAME, description="Window title")
    wait_key_ms: int = Field(
        default=1,
        ge=1,
        description="Milliseconds given to the window event loop per frame",
    )


class LoopConfig(BaseModel):
    """Stream loop configuration."""
    
    max_frames: int = Field(
        default=0,
        ge=0,
        description="Stop after this many frames (0 = run until signalled)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""
    
    level: str = Field(default="INFO", description="Log level")
    format: Literal["text", "json"] = Field(default="text", description="Log format: json or text")


class Settings(BaseModel):
    """
    Main settings class for monoview.
    
    Loads configuration from YAML file and environment variables.
    Environment variables take precedence over file values.
    """
    
    frame: FrameConfig = Field(default_factory=FrameConfig)
    monitor: MonitorConfig = Field(default_factory=MonitorConfig)
    producer: ProducerConfig = Field(default_factory=ProducerConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    loop: LoopConfig = Field(default_factory=LoopConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# =============================================================================
# Configuration Loading
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file and environment variables.
    
    Priority (highest to lowest):
        1. Environment variables
        2. YAML config file
        3. Default values
        
    Args:
        config_path: Path to config.yaml. If None, searches common locations.
        
    Returns:
        Settings: Loaded configuration
        
    Raises:
        FileNotFoundError: If an explicit config_path does not exist
        pydantic.ValidationError: If a value violates its constraints
    """
    if config_path is not None and not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    
    # Find config file
    if config_path is None:
        search_paths = [
            Path("config.yaml"),
            Path("config.yml"),
            Path(__file__).parent.parent.parent / "config.yaml",
        ]
        for path in search_paths:
            if path.exists():
                config_path = str(path)
                break
    
    # Load from YAML if exists
    config_data = {}
    if config_path:
        logger.info(f"Loading config from: {config_path}")
        with open(config_path, "r") as f:
            config_data = yaml.safe_load(f) or {}
    else:
        logger.debug("No config file found, using defaults and environment variables")
    
    # Apply environment variable overrides
    _apply_env_overrides(config_data)
    
    return Settings.model_validate(config_data)


def _apply_env_overrides(config_data: dict) -> None:
    """Apply environment variable overrides to config data."""
    
    # Frame geometry
    if env_width := os.environ.get("MONOVIEW_WIDTH"):
        config_data.setdefault("frame", {})["width"] = int(env_width)
    if env_height := os.environ.get("MONOVIEW_HEIGHT"):
        config_data.setdefault("frame", {})["height"] = int(env_height)
    
    # Rate monitor
    if env_interval := os.environ.get("MONOVIEW_REPORT_INTERVAL"):
        config_data.setdefault("monitor", {})["report_interval_seconds"] = float(env_interval)
    
    # Producer
    if env_backend := os.environ.get("MONOVIEW_PRODUCER"):
        config_data.setdefault("producer", {})["backend"] = env_backend
    if env_seed := os.environ.get("MONOVIEW_SEED"):
        config_data.setdefault("producer", {})["seed"] = int(env_seed)
    if env_device := os.environ.get("MONOVIEW_DEVICE"):
        config_data.setdefault("producer", {})["device_index"] = int(env_device)
    
    # Display
    if env_window := os.environ.get("MONOVIEW_WINDOW_NAME"):
        config_data.setdefault("display", {})["window_name"] = env_window
    
    # Loop
    if env_max := os.environ.get("MONOVIEW_MAX_FRAMES"):
        config_data.setdefault("loop", {})["max_frames"] = int(env_max)
    
    # Logging settings
    if env_log := os.environ.get("MONOVIEW_LOG_LEVEL"):
        config_data.setdefault("logging", {})["level"] = env_log
    if env_fmt := os.environ.get("MONOVIEW_LOG_FORMAT"):
        config_data.setdefault("logging", {})["format"] = env_fmt


def setup_logging(settings: Settings) -> None:
    """Configure logging based on settings."""
    log_level = getattr(logging, settings.logging.level.upper(), logging.INFO)
    
    if settings.logging.format == "json":
        log_format = '{"time": "%(asctime)s", "level": "%(levelname)s", "module": "%(name)s", "message": "%(message)s"}'
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    
    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S",
    )
