"""
Frame View
==========

Non-owning descriptor of a frame's memory layout.

A FrameView is how pixel data crosses from the FrameBuffer to a display
sink. It carries a handle to the buffer's backing store plus the header
information needed to interpret it (stride, width, height, format).

Lifetime Rules:
    - A view is valid only until the next FrameBuffer.fill()
    - Sinks must NOT retain a view (or arrays derived from it) past the
      display() call that received it
    - Building a view never copies pixel data
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class PixelFormat(str, Enum):
    """
    Pixel formats understood by display sinks.
    
    Only single-channel 8-bit data is supported.
    """
    
    MONO8 = "MONO8"


@dataclass(frozen=True, slots=True)
class FrameView:
    """
    Zero-copy view over a FrameBuffer's backing store.
    
    Attributes:
        data: Flat uint8 backing store (the buffer's own array, not a copy)
        stride: Bytes per row (equal to width, rows are never padded)
        width: Frame width in pixels
        height: Frame height in pixels
        pixel_format: Sample layout, always MONO8
    """
    
    data: np.ndarray
    stride: int
    width: int
    height: int
    pixel_format: PixelFormat = PixelFormat.MONO8
    
    @property
    def nbytes(self) -> int:
        """Number of bytes described by the header."""
        return self.stride * self.height
    
    def as_array(self) -> np.ndarray:
        """
        Interpret the backing store as an (height, width) image.
        
        Returns a numpy view sharing memory with the store. Row-major
        contiguity is what makes the reshape free; a padded stride would
        force a copy, so it is rejected here.
        
        Raises:
            ValueError: If the header does not describe the store
        """
        if self.stride != self.width:
            raise ValueError(
                f"Padded rows are not supported: stride={self.stride}, "
                f"width={self.width}"
            )
        if self.data.size != self.nbytes:
            raise ValueError(
                f"Store holds {self.data.size} bytes, header describes {self.nbytes}"
            )
        return self.data.reshape(self.height, self.width)
    
    def __repr__(self) -> str:
        """Compact repr that doesn't dump the pixels."""
        return (
            f"FrameView(width={self.width}, height={self.height}, "
            f"stride={self.stride}, format={self.pixel_format.value})"
        )
