"""
monoview Main Application
=========================

Command line entry point for the live monochrome viewer.

Builds the frame buffer, producer, display sink and rate monitor from
settings, installs SIGINT/SIGTERM handlers, and runs the stream loop until
it stops. The process exit status is the loop's exit status.

Usage:
    monoview
    monoview --width 640 --height 480 --producer camera --device 0
    monoview --config config.yaml --max-frames 300

Exit Status:
    0 - stopped by signal or frame limit
    1 - fatal producer or sink failure
    2 - invalid configuration
"""

import argparse
import logging
import sys
from typing import List, Optional, Union

import yaml
from pydantic import ValidationError

from monoview.config import Settings, load_config, setup_logging
from monoview.stream import (
    FrameBuffer,
    NoiseFrameProducer,
    OpenCVWindowSink,
    ProducerError,
    RateMonitor,
    StopFlag,
    StreamLoop,
    VideoCaptureProducer,
)
from monoview.stream.loop import EXIT_FATAL


logger = logging.getLogger(__name__)


EXIT_CONFIG_ERROR = 2


# =============================================================================
# Argument Parsing
# =============================================================================

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monoview",
        description="Display single-channel camera frames and report FPS",
    )
    parser.add_argument("--config", help="Path to config.yaml")
    parser.add_argument("--width", type=int, help="Frame width in pixels")
    parser.add_argument("--height", type=int, help="Frame height in pixels")
    parser.add_argument("--producer", choices=["noise", "camera"], help="Frame source")
    parser.add_argument("--device", type=int, help="Capture device index (camera producer)")
    parser.add_argument("--seed", type=int, help="Random seed (noise producer)")
    parser.add_argument("--max-frames", type=int, help="Stop after N frames (0 = unbounded)")
    parser.add_argument(
        "--log-level",
        help="Log level (DEBUG, INFO, ...). FPS reports are logged at INFO, so WARNING or above hides them",
    )
    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """
    Apply command line flags on top of loaded settings.
    
    Flags have the highest precedence. The result is re-validated so CLI
    values obey the same constraints as file and environment values.
    """
    data = settings.model_dump()
    
    if args.width is not None:
        data["frame"]["width"] = args.width
    if args.height is not None:
        data["frame"]["height"] = args.height
    if args.producer is not None:
        data["producer"]["backend"] = args.producer
    if args.device is not None:
        data["producer"]["device_index"] = args.device
    if args.seed is not None:
        data["producer"]["seed"] = args.seed
    if args.max_frames is not None:
        data["loop"]["max_frames"] = args.max_frames
    if args.log_level is not None:
        data["logging"]["level"] = args.log_level
    
    return Settings.model_validate(data)


# =============================================================================
# Producer Factory
# =============================================================================

def create_producer(settings: Settings) -> Union[NoiseFrameProducer, VideoCaptureProducer]:
    """
    Create frame producer based on config.
    
    Raises:
        ValueError: If the backend is unknown
        ProducerError: If the camera cannot be opened
    """
    backend = settings.producer.backend
    
    if backend == "noise":
        logger.info("Using NoiseFrameProducer")
        return NoiseFrameProducer(seed=settings.producer.seed)
    
    elif backend == "camera":
        logger.info(f"Using VideoCaptureProducer on device {settings.producer.device_index}")
        return VideoCaptureProducer(
            device=settings.producer.device_index,
            width=settings.frame.width,
            height=settings.frame.height,
        )
    
    else:
        raise ValueError(f"Unknown producer backend: {backend}")


# =============================================================================
# Entry Point
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """Run the viewer and return the process exit status."""
    args = build_parser().parse_args(argv)
    
    try:
        settings = apply_cli_overrides(load_config(args.config), args)
    except (ValidationError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR
    
    setup_logging(settings)
    
    try:
        producer = create_producer(settings)
    except ProducerError as e:
        logger.error(f"Failed to start producer: {e}")
        return EXIT_FATAL
    
    stop_flag = StopFlag()
    stop_flag.install_signal_handlers()
    
    loop = StreamLoop(
        buffer=FrameBuffer(settings.frame.width, settings.frame.height),
        producer=producer,
        sink=OpenCVWindowSink(
            window_name=settings.display.window_name,
            wait_key_ms=settings.display.wait_key_ms,
        ),
        stop_signal=stop_flag,
        monitor=RateMonitor(interval=settings.monitor.report_interval_seconds),
        max_frames=settings.loop.max_frames,
    )
    
    try:
        return loop.run()
    finally:
        close = getattr(producer, "close", None)
        if close is not None:
            close()


if __name__ == "__main__":
    sys.exit(main())
