"""
Assets Module - Image Loading
=============================
Loads the canvas background and the card back image, with generated
placeholders when no image file is available.
"""

import cv2
import numpy as np
from pathlib import Path
from typing import Optional, Tuple
from PIL import Image


def load_image(path: Path, size: Tuple[int, int]) -> np.ndarray:
    """
    Load an image file resized to the given size.

    Args:
        path: Image file path
        size: Output size as (width, height)

    Returns:
        BGR numpy array

    Raises:
        OSError: If the file is missing or cannot be decoded
    """
    with Image.open(path) as img:
        rgb = img.convert("RGB").resize(size, Image.LANCZOS)
        array = np.array(rgb)
    return cv2.cvtColor(array, cv2.COLOR_RGB2BGR)


def placeholder_background(size: Tuple[int, int]) -> np.ndarray:
    """Soft vertical gradient used when no background image is given."""
    width, height = size
    top = np.array([250, 240, 228], dtype=np.float32)
    bottom = np.array([205, 222, 245], dtype=np.float32)

    t = np.linspace(0.0, 1.0, height, dtype=np.float32)[:, None, None]
    gradient = top * (1 - t) + bottom * t
    return np.repeat(gradient, width, axis=1).astype(np.uint8)


def placeholder_back(size: Tuple[int, int]) -> np.ndarray:
    """Blue playing-card style back with a diamond lattice."""
    width, height = size
    back = np.full((height, width, 3), (180, 90, 20), dtype=np.uint8)

    border = max(4, min(width, height) // 20)
    cv2.rectangle(
        back, (border, border), (width - border - 1, height - border - 1),
        (255, 255, 255), max(1, border // 3)
    )

    spacing = max(8, min(width, height) // 10)
    line_color = (215, 140, 60)
    for k in range(-height, width + height, spacing):
        cv2.line(back, (k, 0), (k + height, height), line_color, 1, cv2.LINE_AA)
        cv2.line(back, (k, height), (k + height, 0), line_color, 1, cv2.LINE_AA)
    return back


def load_or_placeholder(
    path: Optional[Path],
    size: Tuple[int, int],
    kind: str = "background"
) -> np.ndarray:
    """
    Load an image, falling back to a generated placeholder.

    Args:
        path: Image file path, or None to use the placeholder
        size: Output size as (width, height)
        kind: "background" or "back", selects the placeholder

    Returns:
        BGR numpy array of the requested size
    """
    placeholder = placeholder_back if kind == "back" else placeholder_background

    if path is None:
        return placeholder(size)

    try:
        image = load_image(path, size)
        print(f"[INFO] Loaded {kind} image: {path}")
        return image
    except OSError as e:
        print(f"[WARN] Could not load {kind} image '{path}': {e}. Using placeholder.")
        return placeholder(size)
