"""
Stream Module
=============

Frame buffer, collaborators and the display loop.

Components:
    - FrameBuffer: Fixed W×H uint8 store with a zero-copy FrameView
    - RateMonitor: Periodic frames-per-second measurement
    - StreamLoop: Synchronous acquire → display → measure loop
    - FrameProducer / DisplaySink: Collaborator protocols and implementations

Example:
    from monoview.stream import (
        FrameBuffer, NoiseFrameProducer, OpenCVWindowSink, StopFlag, StreamLoop,
    )
    
    loop = StreamLoop(
        buffer=FrameBuffer(width=1000, height=400),
        producer=NoiseFrameProducer(),
        sink=OpenCVWindowSink(),
        stop_signal=StopFlag(),
    )
    exit_status = loop.run()
"""

from monoview.stream.errors import StreamError, ProducerError, SinkError
from monoview.stream.frame import FrameView, PixelFormat
from monoview.stream.producer import (
    FrameProducer,
    NoiseFrameProducer,
    VideoCaptureProducer,
)
from monoview.stream.sink import DisplaySink, OpenCVWindowSink
from monoview.stream.buffer import FrameBuffer
from monoview.stream.rate import RateMonitor, RateReport
from monoview.stream.loop import StopFlag, StopSignal, StreamLoop, StreamState


__all__ = [
    "StreamError",
    "ProducerError",
    "SinkError",
    "FrameView",
    "PixelFormat",
    "FrameProducer",
    "NoiseFrameProducer",
    "VideoCaptureProducer",
    "DisplaySink",
    "OpenCVWindowSink",
    "FrameBuffer",
    "RateMonitor",
    "RateReport",
    "StopFlag",
    "StopSignal",
    "StreamLoop",
    "StreamState",
]
