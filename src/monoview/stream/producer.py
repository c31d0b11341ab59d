"""
Frame Producers
===============

Frame source abstraction for the display loop.

This module provides the FrameProducer protocol and two implementations:
    - NoiseFrameProducer: uniform random noise, a stand-in for camera data
    - VideoCaptureProducer: frames grabbed from an OpenCV capture device

Design Rules:
    - Producers write into a caller-supplied flat uint8 array
    - Producers report how many samples they wrote; the buffer decides
      whether that is a full frame
    - Producers never allocate the frame store themselves
"""

import logging
from typing import Optional, Protocol

import cv2
import numpy as np

from monoview.stream.errors import ProducerError


logger = logging.getLogger(__name__)


class FrameProducer(Protocol):
    """
    Protocol for frame sources.
    
    Implementations write the next frame's single-channel 8-bit samples
    into `out` in place and return the number of samples written. They may
    raise ProducerError when the source is unusable.
    """
    
    def read_into(self, out: np.ndarray) -> int:
        """
        Write the next frame into `out`.
        
        Args:
            out: Flat, contiguous uint8 array of width * height samples
            
        Returns:
            Number of samples written
        """
        ...


class NoiseFrameProducer:
    """
    Simulated monochrome camera producing uniform random noise.
    
    Samples are drawn from [0, 255) with numpy's Generator API. A fixed
    seed gives a reproducible frame sequence.
    
    Attributes:
        seed: Seed used for the random generator (None = OS entropy)
        frames_produced: Number of frames written so far
    """
    
    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self.frames_produced: int = 0
        self._rng = np.random.default_rng(seed)
        
        logger.info(f"NoiseFrameProducer initialized: seed={seed}")
    
    def read_into(self, out: np.ndarray) -> int:
        """Fill `out` with one frame of noise."""
        out[:] = self._rng.integers(0, 255, size=out.size, dtype=np.uint8)
        self.frames_produced += 1
        return out.size


class VideoCaptureProducer:
    """
    Frame producer backed by cv2.VideoCapture.
    
    Color frames are converted to grayscale. The device is used as-is:
    its resolution must already match the configured frame size, since
    camera configuration is outside this package. A failed grab or a
    size mismatch is reported as a short read.
    
    Attributes:
        device: Capture device index
        width: Expected frame width
        height: Expected frame height
    """
    
    def __init__(self, device: int, width: int, height: int) -> None:
        """
        Open the capture device.
        
        Raises:
            ProducerError: If the device cannot be opened
        """
        self.device = device
        self.width = width
        self.height = height
        self._capture = cv2.VideoCapture(device)
        
        if not self._capture.isOpened():
            raise ProducerError(f"Failed to open capture device {device}")
        
        logger.info(f"VideoCaptureProducer opened device {device}, expecting {width}x{height}")
    
    def read_into(self, out: np.ndarray) -> int:
        """
        Grab one frame and copy it into `out` as 8-bit mono.
        
        Raises:
            ProducerError: If OpenCV fails while grabbing or converting
        """
        try:
            ok, frame = self._capture.read()
            if not ok or frame is None:
                logger.warning(f"Capture device {self.device} returned no frame")
                return 0
            
            if frame.ndim == 3 and frame.shape[2] == 1:
                frame = frame[:, :, 0]
            elif frame.ndim == 3:
                frame = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        except cv2.error as e:
            raise ProducerError(f"OpenCV capture failed on device {self.device}: {e}")
        
        if frame.shape != (self.height, self.width) or frame.dtype != np.uint8:
            logger.warning(
                f"Capture frame mismatch: got {frame.shape} {frame.dtype}, "
                f"expected ({self.height}, {self.width}) uint8"
            )
            return 0
        
        np.copyto(out.reshape(self.height, self.width), frame)
        return frame.size
    
    def close(self) -> None:
        """Release the capture device."""
        self._capture.release()
        logger.info(f"Capture device {self.device} released")
