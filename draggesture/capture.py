"""
Capture Module - Render-to-Bitmap
=================================
Rasterizes a rectangular region of the composed window into a
read-only bitmap for the flip card.
"""

import time
import numpy as np
from typing import Tuple
from dataclasses import dataclass, field


class CaptureError(ValueError):
    """Raised when a region cannot be captured."""


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in window coordinates."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def zero(cls) -> "Rect":
        return cls(0, 0, 0, 0)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside the rectangle."""
        return (self.x <= x < self.x + self.width and
                self.y <= y < self.y + self.height)

    def to_local(self, x: float, y: float) -> Tuple[float, float]:
        """Convert window coordinates to coordinates relative to the origin."""
        return x - self.x, y - self.y


@dataclass(frozen=True)
class CapturedImage:
    """
    A bitmap captured from the window.

    Attributes:
        image: BGR pixels (read-only)
        rect: Window region the pixels came from
        timestamp: When the capture was taken
    """
    image: np.ndarray
    rect: Rect
    timestamp: float = field(default_factory=time.time)

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]


def capture_region(frame: np.ndarray, rect: Rect) -> CapturedImage:
    """
    Copy exactly ``rect`` out of a composed frame.

    The result always has the rectangle's dimensions; parts of the
    rectangle that fall outside the frame are black.

    Args:
        frame: Composed BGR window frame
        rect: Region to capture, in frame coordinates

    Returns:
        CapturedImage holding a read-only copy of the region

    Raises:
        CaptureError: If the rectangle has no area
    """
    if rect.is_empty:
        raise CaptureError(f"Cannot capture an empty region: {rect}")

    frame_h, frame_w = frame.shape[:2]
    channels = frame.shape[2:]
    bitmap = np.zeros((rect.height, rect.width) + channels, dtype=frame.dtype)

    # Intersection of the rectangle with the frame
    x0 = max(rect.x, 0)
    y0 = max(rect.y, 0)
    x1 = min(rect.x + rect.width, frame_w)
    y1 = min(rect.y + rect.height, frame_h)

    if x1 > x0 and y1 > y0:
        bitmap[y0 - rect.y:y1 - rect.y, x0 - rect.x:x1 - rect.x] = frame[y0:y1, x0:x1]

    bitmap.flags.writeable = False
    return CapturedImage(image=bitmap, rect=rect)

