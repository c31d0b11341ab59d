"""
Stream Errors
=============

Exception hierarchy for the display pipeline.

Both producer and sink failures are fatal for the stream: there is no
retry and no partial-frame recovery. A skipped frame would leave a stale
buffer on screen, so the loop stops instead.
"""


class StreamError(Exception):
    """Base class for fatal stream failures."""
    pass


class ProducerError(StreamError):
    """Raised when the frame producer cannot supply a full frame."""
    pass


class SinkError(StreamError):
    """Raised when the display sink cannot accept or render a frame."""
    pass
