"""
Frame Buffer
============

Fixed-size, reusable pixel store for single-channel frames.

This module provides the FrameBuffer class, which owns the only pixel
memory in the pipeline. The store is allocated once from the configured
dimensions and overwritten in place on every fill, so the view handed to
the display sink always points at the same bytes.

Design Rules:
    - One allocation per stream, never resized or reallocated
    - Row-major, stride == width, no padding
    - A fill either writes a full frame or raises ProducerError
    - view() is O(1) and never copies pixel data
"""

import logging

import numpy as np

from monoview.stream.errors import ProducerError
from monoview.stream.frame import FrameView, PixelFormat
from monoview.stream.producer import FrameProducer


logger = logging.getLogger(__name__)


class FrameBuffer:
    """
    Contiguous W×H uint8 store with a zero-copy view.
    
    Attributes:
        width: Frame width in pixels
        height: Frame height in pixels
        size: Number of samples in one frame (width * height)
        fill_count: Number of successful fills
        
    Example:
        buffer = FrameBuffer(width=1000, height=400)
        
        buffer.fill(producer)
        sink.display(buffer.view())
    """
    
    def __init__(self, width: int, height: int) -> None:
        """
        Allocate the backing store.
        
        Args:
            width: Frame width in pixels. Must be >= 1.
            height: Frame height in pixels. Must be >= 1.
        """
        if width < 1 or height < 1:
            raise ValueError(
                f"Frame dimensions must be positive, got {width}x{height}"
            )
        
        self._width = width
        self._height = height
        self._store = np.zeros(width * height, dtype=np.uint8)
        self._fill_count: int = 0
        
        logger.debug(f"FrameBuffer allocated: {width}x{height} ({self._store.nbytes} bytes)")
    
    @property
    def width(self) -> int:
        """Frame width in pixels."""
        return self._width
    
    @property
    def height(self) -> int:
        """Frame height in pixels."""
        return self._height
    
    @property
    def stride(self) -> int:
        """Bytes per row."""
        return self._width
    
    @property
    def size(self) -> int:
        """Samples per frame."""
        return self._store.size
    
    @property
    def fill_count(self) -> int:
        """Number of completed fills."""
        return self._fill_count
    
    def fill(self, producer: FrameProducer) -> None:
        """
        Overwrite the store with the producer's next frame.
        
        Args:
            producer: Frame source writing into the store in place
            
        Raises:
            ProducerError: If the producer wrote anything other than
                exactly width * height samples
        """
        written = producer.read_into(self._store)
        
        if written != self._store.size:
            raise ProducerError(
                f"Short read from producer: got {written} of "
                f"{self._store.size} samples"
            )
        
        self._fill_count += 1
    
    def view(self) -> FrameView:
        """
        Describe the current store for display.
        
        The returned view is valid until the next fill().
        """
        return FrameView(
            data=self._store,
            stride=self._width,
            width=self._width,
            height=self._height,
            pixel_format=PixelFormat.MONO8,
        )
    
    def metrics(self) -> dict:
        """
        Get buffer metrics for observability.
        
        Returns:
            Dict with width, height, nbytes, fill_count
        """
        return {
            "width": self._width,
            "height": self._height,
            "nbytes": self._store.nbytes,
            "fill_count": self._fill_count,
        }
