"""
Stream Loop
===========

Synchronous acquire → display → measure loop.

Each iteration fills the FrameBuffer from the producer, hands a zero-copy
view to the sink, and records the frame with the RateMonitor. There is no
queue between producer and sink: the next frame is not fetched until the
current one has been displayed, so memory use is bounded to one frame and
display latency gates acquisition rate.

State Machine:
    RUNNING → STOPPED when the stop signal is observed (checked at the top
    of every iteration), when max_frames is reached, or on a fatal
    ProducerError / SinkError.
"""

import logging
import signal
import time
from enum import Enum
from typing import Callable, List, Optional, Protocol

from monoview.stream.buffer import FrameBuffer
from monoview.stream.errors import StreamError
from monoview.stream.producer import FrameProducer
from monoview.stream.rate import RateMonitor, RateReport
from monoview.stream.sink import DisplaySink


logger = logging.getLogger(__name__)


EXIT_OK = 0
EXIT_FATAL = 1


class StreamState(str, Enum):
    """Loop states. There is no paused or error state."""
    
    RUNNING = "RUNNING"
    STOPPED = "STOPPED"


class StopSignal(Protocol):
    """Anything that can be polled for a stop request (threading.Event fits)."""
    
    def is_set(self) -> bool:
        ...


class StopFlag:
    """
    In-process stop signal.
    
    Set from a signal handler or by the caller; polled by the loop once
    per iteration. A blocked producer or sink call is not interrupted.
    """
    
    def __init__(self) -> None:
        self._stop = False
    
    def set(self) -> None:
        self._stop = True
    
    def is_set(self) -> bool:
        return self._stop
    
    def install_signal_handlers(self) -> None:
        """Set the flag on SIGINT and SIGTERM."""
        signal.signal(signal.SIGINT, self._handle_signal)
        signal.signal(signal.SIGTERM, self._handle_signal)
    
    def _handle_signal(self, signum, frame) -> None:
        logger.info(f"Received {signal.Signals(signum).name}, stopping stream...")
        self.set()


class StreamLoop:
    """
    Drives producer, buffer, sink and rate monitor in lock-step.
    
    Attributes:
        state: Current StreamState
        frames_displayed: Frames handed to the sink successfully
        reports: RateReports emitted so far
        
    Example:
        loop = StreamLoop(
            buffer=FrameBuffer(1000, 400),
            producer=NoiseFrameProducer(),
            sink=OpenCVWindowSink(),
            stop_signal=StopFlag(),
        )
        sys.exit(loop.run())
    """
    
    def __init__(
        self,
        buffer: FrameBuffer,
        producer: FrameProducer,
        sink: DisplaySink,
        stop_signal: StopSignal,
        monitor: Optional[RateMonitor] = None,
        clock: Callable[[], float] = time.monotonic,
        max_frames: int = 0,
    ) -> None:
        """
        Initialize the loop.
        
        Args:
            buffer: Frame store filled each iteration
            producer: Frame source
            sink: Display surface
            stop_signal: Polled once per iteration
            monitor: Rate monitor; created here (starting now) if omitted
            clock: Monotonic time source used for rate reports
            max_frames: Stop after this many displayed frames (0 = unbounded)
        """
        if max_frames < 0:
            raise ValueError("max_frames must be >= 0")
        
        self.buffer = buffer
        self.producer = producer
        self.sink = sink
        self.stop_signal = stop_signal
        self.clock = clock
        self.max_frames = max_frames
        self.monitor = monitor if monitor is not None else RateMonitor(start=clock())
        
        self._state = StreamState.RUNNING
        self._frames_displayed: int = 0
        self._reports: List[RateReport] = []
    
    @property
    def state(self) -> StreamState:
        return self._state
    
    @property
    def frames_displayed(self) -> int:
        return self._frames_displayed
    
    @property
    def reports(self) -> List[RateReport]:
        return list(self._reports)
    
    def step(self) -> Optional[RateReport]:
        """
        Run one acquire → display → measure iteration.
        
        Returns:
            The RateReport emitted by this iteration, if any
            
        Raises:
            ProducerError: Producer could not supply a full frame
            SinkError: Sink could not render the frame
        """
        self.buffer.fill(self.producer)
        view = self.buffer.view()
        self.sink.display(view)
        self._frames_displayed += 1
        
        self.monitor.record_frame()
        report = self.monitor.maybe_report(self.clock())
        if report is not None:
            self._reports.append(report)
            logger.info(f"FPS: {report.fps}")
            logger.debug(f"Rate report: {report.to_dict()}")
        
        return report
    
    def run(self) -> int:
        """
        Loop until stopped.
        
        Returns:
            Process exit status: 0 after a requested stop, 1 after a fatal
            producer or sink failure
        """
        logger.info(
            f"Stream starting: {self.buffer.width}x{self.buffer.height}, "
            f"report interval {self.monitor.interval:.1f}s"
        )
        exit_status = EXIT_OK
        
        try:
            while self._state is StreamState.RUNNING:
                if self.stop_signal.is_set():
                    logger.info("Stop signal received")
                    self._state = StreamState.STOPPED
                    break
                
                self.step()
                
                if self.max_frames and self._frames_displayed >= self.max_frames:
                    logger.info(f"Frame limit reached ({self.max_frames})")
                    self._state = StreamState.STOPPED
        except StreamError as e:
            logger.error(f"Fatal stream error: {e}")
            self._state = StreamState.STOPPED
            exit_status = EXIT_FATAL
        finally:
            self._close_sink()
        
        logger.info(
            f"Stream stopped after {self._frames_displayed} frames "
            f"({len(self._reports)} rate reports), "
            f"buffer={self.buffer.metrics()}, monitor={self.monitor.metrics()}"
        )
        return exit_status
    
    def _close_sink(self) -> None:
        close = getattr(self.sink, "close", None)
        if close is not None:
            close()
