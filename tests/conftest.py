"""
Test Configuration
==================

Pytest fixtures and test doubles for monoview.
"""

import numpy as np
import pytest

from monoview.stream.errors import ProducerError, SinkError
from monoview.stream.frame import FrameView


class FakeClock:
    """Manually advanced monotonic clock."""
    
    def __init__(self, start: float = 0.0) -> None:
        self.now = start
    
    def advance(self, seconds: float) -> None:
        self.now += seconds
    
    def __call__(self) -> float:
        return self.now


class CountingProducer:
    """
    Writes frames whose every sample equals the call number (mod 256).
    
    Fails on call `fail_on` (1-based) by returning a short read, or by
    raising ProducerError when `raise_on_fail` is set.
    """
    
    def __init__(self, fail_on: int = 0, raise_on_fail: bool = False) -> None:
        self.calls = 0
        self.fail_on = fail_on
        self.raise_on_fail = raise_on_fail
    
    def read_into(self, out: np.ndarray) -> int:
        self.calls += 1
        if self.calls == self.fail_on:
            if self.raise_on_fail:
                raise ProducerError("camera unplugged")
            out[: out.size // 2] = 0
            return out.size // 2
        out[:] = self.calls % 256
        return out.size


class RecordingSink:
    """
    Records what each display() call saw.
    
    Keeps a copy of the pixels (never the view itself) plus the identity
    of the backing store, and optionally advances a clock per frame.
    """
    
    def __init__(
        self,
        clock: FakeClock = None,
        frame_time: float = 0.0,
        fail_on: int = 0,
        keep_snapshots: bool = True,
    ) -> None:
        self.clock = clock
        self.frame_time = frame_time
        self.fail_on = fail_on
        self.calls = 0
        self.snapshots = []
        self.store_ids = set()
        self.keep_snapshots = keep_snapshots
        self.closed = False
    
    def display(self, view: FrameView) -> None:
        self.calls += 1
        if self.calls == self.fail_on:
            raise SinkError("display surface lost")
        self.store_ids.add(id(view.data))
        if self.keep_snapshots:
            self.snapshots.append(view.as_array().copy())
        if self.clock is not None:
            self.clock.advance(self.frame_time)
    
    def close(self) -> None:
        self.closed = True


class StopAfter:
    """Stop signal that fires once the sink has shown `limit` frames."""
    
    def __init__(self, sink: RecordingSink, limit: int) -> None:
        self.sink = sink
        self.limit = limit
    
    def is_set(self) -> bool:
        return self.sink.calls >= self.limit


@pytest.fixture
def fake_clock():
    """Provide a clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def small_frame():
    """Provide small frame dimensions as (width, height)."""
    return 8, 4
