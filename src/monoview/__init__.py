"""
monoview
========

Live display of single-channel camera frames with frame-rate reporting.

Frames are written into one reusable buffer, handed to an OpenCV window
without copying, and counted against a periodic throughput measurement.

Components:
    - stream: frame buffer, producers, display sinks, rate monitor, loop
    - config: YAML + environment settings and logging setup
    - main: command line entry point

Example:
    from monoview.main import main
    
    raise SystemExit(main(["--max-frames", "300"]))
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
