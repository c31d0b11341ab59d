"""
Rate Monitor
============

Periodic frame-rate measurement for the display loop.

The monitor counts displayed frames and, once at least one reporting
interval has elapsed since the previous report, emits the count as the
frames-per-second value for that interval.

Semantics:
    - Reports are driven by elapsed time, not by frame count, so a stalled
      producer still yields a report of 0
    - The next interval starts at the moment a report fires; intervals
      drift slightly past the nominal length instead of following a fixed
      grid
    - The first interval starts when the monitor is created, so the first
      value may include window-creation latency
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional


logger = logging.getLogger(__name__)


DEFAULT_REPORT_INTERVAL = 1.0


@dataclass(frozen=True, slots=True)
class RateReport:
    """
    One throughput measurement.
    
    Attributes:
        fps: Frames displayed during the interval
        elapsed: Actual interval length in seconds (>= nominal interval)
        timestamp: Clock value at which the report fired
    """
    
    fps: int
    elapsed: float
    timestamp: float
    
    def to_dict(self) -> dict:
        """Export as dictionary for logging/serialization."""
        return {
            "fps": self.fps,
            "elapsed": round(self.elapsed, 3),
            "timestamp": round(self.timestamp, 3),
        }


class RateMonitor:
    """
    Counts frames and emits a RateReport once per reporting interval.
    
    Example:
        monitor = RateMonitor(interval=1.0)
        
        monitor.record_frame()
        report = monitor.maybe_report(time.monotonic())
        if report is not None:
            print(f"FPS: {report.fps}")
    """
    
    def __init__(
        self,
        interval: float = DEFAULT_REPORT_INTERVAL,
        start: Optional[float] = None,
    ) -> None:
        """
        Initialize rate monitor.
        
        Args:
            interval: Reporting interval in seconds. Must be > 0.
            start: Timestamp the first interval is measured from.
                Defaults to time.monotonic().
        """
        if interval <= 0:
            raise ValueError("interval must be > 0")
        
        self._interval = interval
        self._last_report = time.monotonic() if start is None else start
        self._count: int = 0
        self._total_frames: int = 0
        self._report_count: int = 0
    
    @property
    def interval(self) -> float:
        return self._interval
    
    @property
    def count(self) -> int:
        """Frames recorded since the last report."""
        return self._count
    
    @property
    def last_report(self) -> float:
        """Timestamp of the last report (or of monitor start)."""
        return self._last_report
    
    @property
    def total_frames(self) -> int:
        return self._total_frames
    
    @property
    def report_count(self) -> int:
        return self._report_count
    
    def record_frame(self) -> None:
        """Count one displayed frame."""
        self._count += 1
        self._total_frames += 1
    
    def maybe_report(self, now: float) -> Optional[RateReport]:
        """
        Emit a report if a full interval has elapsed.
        
        Args:
            now: Current timestamp, same clock as `start`
            
        Returns:
            RateReport for the finished interval, or None if the interval
            is still running (state is left unchanged in that case)
        """
        elapsed = now - self._last_report
        if elapsed < self._interval:
            return None
        
        report = RateReport(fps=self._count, elapsed=elapsed, timestamp=now)
        self._count = 0
        self._last_report = now
        self._report_count += 1
        return report
    
    def metrics(self) -> dict:
        """
        Get monitor metrics for observability.
        
        Returns:
            Dict with interval, pending count, totals
        """
        return {
            "interval": self._interval,
            "pending_frames": self._count,
            "total_frames": self._total_frames,
            "report_count": self._report_count,
        }
