"""
Render Module - Stroke Rasterization
====================================
Draws recorded strokes over an image. Each stroke is rasterized on its
own mask and blended with its opacity, so overlapping segments of one
stroke do not darken each other.
"""

import cv2
import numpy as np
from typing import Iterable, Tuple

from draggesture.canvas import Stroke


def stroke_mask(
    stroke: Stroke,
    size: Tuple[int, int],
    offset: Tuple[int, int] = (0, 0)
) -> np.ndarray:
    """
    Rasterize a stroke into a single-channel coverage mask.

    Args:
        stroke: Stroke to draw
        size: Mask size as (width, height)
        offset: Added to every point before drawing

    Returns:
        uint8 mask, 255 where the stroke is fully covered
    """
    width, height = size
    mask = np.zeros((height, width), dtype=np.uint8)

    # A path through fewer than two points has no length
    if len(stroke.points) < 2:
        return mask

    ox, oy = offset
    pts = np.array(
        [(x + ox, y + oy) for x, y in stroke.points], dtype=np.float64
    )
    pts = np.round(pts).astype(np.int32).reshape((-1, 1, 2))
    thickness = max(1, int(round(stroke.thickness)))

    cv2.polylines(mask, [pts], False, 255, thickness, cv2.LINE_AA)
    return mask


def draw_stroke(
    image: np.ndarray,
    stroke: Stroke,
    offset: Tuple[int, int] = (0, 0)
) -> np.ndarray:
    """
    Blend one stroke onto a BGR image in place.

    Args:
        image: BGR image to draw on
        stroke: Stroke to draw
        offset: Position of the canvas origin inside the image

    Returns:
        The same image, for chaining
    """
    if len(stroke.points) < 2 or stroke.opacity <= 0:
        return image

    h, w = image.shape[:2]
    ox, oy = offset

    # Only blend the region the stroke can reach
    pts = np.array(stroke.points, dtype=np.float64)
    reach = stroke.thickness / 2 + 2
    x0 = max(int(np.floor(pts[:, 0].min() + ox - reach)), 0)
    y0 = max(int(np.floor(pts[:, 1].min() + oy - reach)), 0)
    x1 = min(int(np.ceil(pts[:, 0].max() + ox + reach)) + 1, w)
    y1 = min(int(np.ceil(pts[:, 1].max() + oy + reach)) + 1, h)
    if x1 <= x0 or y1 <= y0:
        return image

    mask = stroke_mask(stroke, (x1 - x0, y1 - y0), (ox - x0, oy - y0))

    roi = image[y0:y1, x0:x1]
    alpha = (mask.astype(np.float32) / 255.0 * stroke.opacity)[:, :, None]
    color = np.array(stroke.color, dtype=np.float32)

    blended = roi.astype(np.float32) * (1 - alpha) + color * alpha
    roi[:] = np.clip(blended, 0, 255).astype(np.uint8)
    return image


def draw_strokes(
    image: np.ndarray,
    strokes: Iterable[Stroke],
    offset: Tuple[int, int] = (0, 0)
) -> np.ndarray:
    """
    Blend strokes onto a BGR image in order (later strokes on top).

    Args:
        image: BGR image to draw on (modified in place)
        strokes: Strokes in drawing order
        offset: Position of the canvas origin inside the image

    Returns:
        The same image
    """
    for stroke in strokes:
        draw_stroke(image, stroke, offset)
    return image

