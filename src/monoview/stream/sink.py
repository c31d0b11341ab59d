"""
Display Sinks
=============

Frame rendering abstraction for the display loop.

This module provides the DisplaySink protocol and the OpenCV window
implementation used for live viewing.

Design Rules:
    - display() receives a FrameView and must not keep it after returning
    - The sink services its own event loop (cv2.waitKey)
    - Backend failures are raised as SinkError
"""

import logging
from typing import Protocol

import cv2

from monoview.stream.errors import SinkError
from monoview.stream.frame import FrameView, PixelFormat


logger = logging.getLogger(__name__)


DEFAULT_WINDOW_NAME = "PtGrey Live Feed"


class DisplaySink(Protocol):
    """
    Protocol for display surfaces.
    
    display() may block briefly while the surface processes events.
    close() releases the surface and is called once when the loop ends.
    """
    
    def display(self, view: FrameView) -> None:
        ...
    
    def close(self) -> None:
        ...


class OpenCVWindowSink:
    """
    Shows frames in an auto-sized OpenCV HighGUI window.
    
    The frame is wrapped as an (H, W) uint8 array over the buffer's own
    memory and passed straight to cv2.imshow, so no pixel copy happens on
    our side.
    
    Attributes:
        window_name: Title of the HighGUI window
        wait_key_ms: Milliseconds given to cv2.waitKey per frame
        frames_shown: Number of frames displayed
    """
    
    def __init__(
        self,
        window_name: str = DEFAULT_WINDOW_NAME,
        wait_key_ms: int = 1,
    ) -> None:
        if wait_key_ms < 1:
            raise ValueError("wait_key_ms must be >= 1")
        
        self.window_name = window_name
        self.wait_key_ms = wait_key_ms
        self.frames_shown: int = 0
        self._window_open: bool = False
    
    def _open_window(self) -> None:
        cv2.namedWindow(self.window_name, cv2.WINDOW_AUTOSIZE)
        self._window_open = True
        logger.info(f"Display window created: {self.window_name!r}")
    
    def display(self, view: FrameView) -> None:
        """
        Render one frame and service the window's event loop.
        
        Raises:
            SinkError: If the view is not displayable or OpenCV fails
        """
        if view.pixel_format is not PixelFormat.MONO8:
            raise SinkError(f"Unsupported pixel format: {view.pixel_format}")
        
        try:
            image = view.as_array()
        except ValueError as e:
            raise SinkError(f"Invalid frame view {view!r}: {e}")
        
        try:
            if not self._window_open:
                self._open_window()
            cv2.imshow(self.window_name, image)
            cv2.waitKey(self.wait_key_ms)
        except cv2.error as e:
            raise SinkError(f"OpenCV display failed: {e}")
        
        self.frames_shown += 1
    
    def close(self) -> None:
        """Destroy the window if it was created."""
        if not self._window_open:
            return
        
        try:
            cv2.destroyWindow(self.window_name)
        except cv2.error as e:
            logger.warning(f"Failed to destroy window {self.window_name!r}: {e}")
        
        self._window_open = False
        logger.info(f"Display window closed after {self.frames_shown} frames")
