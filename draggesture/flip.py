"""
Flip Module - Flip-Card Animation
=================================
Shows a captured image and a back image as the two faces of a card that
rotates 180 degrees in perspective on each tap.

Transforms use the row-vector convention (``v' = v @ M``): a face is
translated so its center sits at the origin, rotated about a slightly
tilted axis, then given perspective depth.
"""

import math
import time
import cv2
import numpy as np
from typing import Callable, List, Optional, Tuple

from draggesture.capture import CapturedImage


# Rotation axis; normalized before use
FLIP_AXIS = (1.0, 5.0, 0.0)

# Front face is drawn slightly smaller than the card
FRONT_SCALE = 0.99

FRONT_FACE = 0
BACK_FACE = 1


def translation_matrix(tx: float, ty: float, tz: float = 0.0) -> np.ndarray:
    m = np.identity(4)
    m[3, :3] = (tx, ty, tz)
    return m


def rotation_matrix(angle: float, axis: Tuple[float, float, float] = FLIP_AXIS) -> np.ndarray:
    """
    Rotation by ``angle`` radians about ``axis``.

    Args:
        angle: Rotation angle in radians
        axis: Rotation axis (any length, must not be zero)

    Returns:
        4x4 row-vector rotation matrix
    """
    x, y, z = axis
    length = math.sqrt(x * x + y * y + z * z)
    if length == 0:
        raise ValueError("Rotation axis must not be zero")
    x, y, z = x / length, y / length, z / length

    c = math.cos(angle)
    s = math.sin(angle)
    t = 1 - c

    m = np.identity(4)
    m[0, :3] = (c + x * x * t, x * y * t + z * s, x * z * t - y * s)
    m[1, :3] = (x * y * t - z * s, c + y * y * t, y * z * t + x * s)
    m[2, :3] = (x * z * t + y * s, y * z * t - x * s, c + z * z * t)
    return m


def perspective_matrix(size: Tuple[float, float]) -> np.ndarray:
    """Perspective with the eye at a distance of the card's longer side."""
    m = np.identity(4)
    m[2, 3] = -1.0 / max(size)
    return m


def flip_transform(size: Tuple[float, float], angle: float) -> np.ndarray:
    """
    Full 3D transform of a face of the given size at a rotation angle.

    Args:
        size: Face size as (width, height)
        angle: Rotation angle in radians

    Returns:
        4x4 row-vector transform (before the final re-centering)
    """
    width, height = size
    return (
        translation_matrix(-width / 2, -height / 2)
        @ rotation_matrix(angle)
        @ perspective_matrix(size)
    )


def project_corners(size: Tuple[float, float], angle: float) -> np.ndarray:
    """
    Screen positions of a face's corners at a rotation angle.

    Args:
        size: Face size as (width, height)
        angle: Rotation angle in radians

    Returns:
        float32 array of shape (4, 2): top-left, top-right,
        bottom-right, bottom-left
    """
    width, height = size
    transform = flip_transform(size, angle)

    corners = np.array([
        [0, 0, 0, 1],
        [width, 0, 0, 1],
        [width, height, 0, 1],
        [0, height, 0, 1],
    ], dtype=np.float64)

    projected = corners @ transform
    xy = projected[:, :2] / projected[:, 3:4]
    xy += (width / 2, height / 2)
    return xy.astype(np.float32)


def face_z_index(index: int, size: Tuple[float, float], angle: float) -> float:
    """
    Stacking order of a card face at a rotation angle.

    The value is the perspective term of the face transform, negated for
    the back face, so the two faces swap order as the card turns.
    Higher values are drawn on top.

    Args:
        index: FRONT_FACE or BACK_FACE
        size: Face size as (width, height)
        angle: Rotation angle in radians
    """
    z = float(flip_transform(size, angle)[2, 3])
    if index == BACK_FACE:
        z = -z
    return z


class FlipAnimator:
    """
    Linear tween of the card angle.

    Each tap adds pi to the target angle and restarts a linear animation
    from the angle currently on screen.
    """

    def __init__(
        self,
        duration: float = 3.0,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize the animator.

        Args:
            duration: Seconds per flip
            clock: Time source in seconds
        """
        self.duration = duration
        self._clock = clock

        self._start_angle = 0.0
        self._target_angle = 0.0
        self._start_time = 0.0

    @property
    def target_angle(self) -> float:
        return self._target_angle

    def tap(self) -> float:
        """
        Start flipping the card by half a turn.

        Returns:
            The new target angle
        """
        now = self._clock()
        self._start_angle = self.angle(now)
        self._target_angle += math.pi
        self._start_time = now
        return self._target_angle

    def progress(self, now: Optional[float] = None) -> float:
        """Fraction of the current animation that has elapsed (0-1)."""
        if now is None:
            now = self._clock()
        if self.duration <= 0:
            return 1.0
        return max(0.0, min((now - self._start_time) / self.duration, 1.0))

    def angle(self, now: Optional[float] = None) -> float:
        """Angle currently on screen."""
        t = self.progress(now)
        return self._start_angle + (self._target_angle - self._start_angle) * t

    def is_animating(self, now: Optional[float] = None) -> bool:
        return self.progress(now) < 1.0 and self._start_angle != self._target_angle


class FlipCard:
    """
    Two-faced card showing a captured image and a fixed back image.

    Renders both faces with the current animation angle, stacked by
    their z index.
    """

    BACKGROUND_COLOR = (255, 255, 255)

    def __init__(
        self,
        captured: CapturedImage,
        back_image: np.ndarray,
        card_size: Tuple[int, int],
        animator: Optional[FlipAnimator] = None
    ):
        """
        Initialize the card.

        Args:
            captured: Image shown on the front face
            back_image: BGR image shown on the back face
            card_size: Card size as (width, height)
            animator: Angle animator (a 3 second one by default)
        """
        self.captured = captured
        self.card_size = card_size
        self.animator = animator or FlipAnimator()

        width, height = card_size
        front_size = (
            max(1, int(round(width * FRONT_SCALE))),
            max(1, int(round(height * FRONT_SCALE)))
        )
        self._faces = [
            cv2.resize(captured.image.copy(), front_size, interpolation=cv2.INTER_AREA),
            cv2.resize(back_image, (width, height), interpolation=cv2.INTER_AREA),
        ]

        # Room around the card for the parts that swing towards the viewer
        self.padding = max(width, height) // 4

    @property
    def frame_size(self) -> Tuple[int, int]:
        width, height = self.card_size
        return width + 2 * self.padding, height + 2 * self.padding

    def tap(self):
        self.animator.tap()

    def stacking_order(self, angle: float) -> List[int]:
        """Face indices from bottom to top at the given angle."""
        def key(index: int) -> Tuple[float, int]:
            face = self._faces[index]
            size = (face.shape[1], face.shape[0])
            return face_z_index(index, size, angle), index

        return sorted(range(len(self._faces)), key=key)

    def render(self, now: Optional[float] = None) -> np.ndarray:
        """
        Draw the card at the current animation angle.

        Returns:
            BGR frame of size ``frame_size``
        """
        angle = self.animator.angle(now)
        out_w, out_h = self.frame_size
        frame = np.full((out_h, out_w, 3), self.BACKGROUND_COLOR, dtype=np.uint8)

        for index in self.stacking_order(angle):
            self._draw_face(frame, self._faces[index], angle)

        return frame

    def _draw_face(self, frame: np.ndarray, face: np.ndarray, angle: float):
        out_h, out_w = frame.shape[:2]
        face_h, face_w = face.shape[:2]

        # Faces are centered on the card
        offset = np.array([
            (out_w - face_w) / 2,
            (out_h - face_h) / 2,
        ], dtype=np.float32)
        dst = project_corners((face_w, face_h), angle) + offset

        # Edge-on faces have no visible area
        if abs(cv2.contourArea(dst)) < 1.0:
            return

        src = np.array([
            [0, 0], [face_w, 0], [face_w, face_h], [0, face_h]
        ], dtype=np.float32)
        matrix = cv2.getPerspectiveTransform(src, dst)

        warped = cv2.warpPerspective(face, matrix, (out_w, out_h), flags=cv2.INTER_LINEAR)
        mask = cv2.warpPerspective(
            np.full((face_h, face_w), 255, dtype=np.uint8),
            matrix, (out_w, out_h), flags=cv2.INTER_LINEAR
        )

        alpha = (mask.astype(np.float32) / 255.0)[:, :, None]
        frame[:] = (frame * (1 - alpha) + warped * alpha).astype(np.uint8)
