"""
Canvas Module - Stroke Recording Board
======================================
Records freehand strokes from drag gestures on top of an image.
Keeps an append-only stroke history with single-step undo, and the
style state (palette color, thickness, opacity) for the stroke being drawn.
"""

from typing import List, Tuple, Optional, Sequence
from dataclasses import dataclass

from draggesture.controls import StyleProfile, OVERLAY_PROFILE


Point = Tuple[float, float]


@dataclass(frozen=True)
class Stroke:
    """
    A single freehand stroke.

    Attributes:
        points: Ordered (x, y) points in canvas coordinates
        color_index: Index into the color palette
        thickness: Line thickness
        opacity: Stroke opacity (0-1)
    """
    points: Tuple[Point, ...] = ()
    color_index: int = 1
    thickness: float = 5.0
    opacity: float = 0.5

    @property
    def color(self) -> Tuple[int, int, int]:
        """BGR color of the stroke."""
        return ColorPalette.color(self.color_index)

    def is_empty(self) -> bool:
        """Check if the stroke has no points."""
        return len(self.points) == 0

    def __len__(self) -> int:
        return len(self.points)


class ColorPalette:
    """Fixed, ordered color palette (BGR), cycled by index."""

    BLACK = (0, 0, 0)
    BLUE = (255, 122, 0)
    GRAY = (147, 142, 142)
    GREEN = (89, 199, 52)
    ORANGE = (0, 149, 255)
    PINK = (85, 45, 255)
    PURPLE = (222, 82, 175)
    RED = (48, 59, 255)
    YELLOW = (0, 204, 255)
    WHITE = (255, 255, 255)

    NAMES = (
        "black", "blue", "gray", "green", "orange",
        "pink", "purple", "red", "yellow", "white"
    )

    @classmethod
    def get_all(cls) -> List[Tuple[int, int, int]]:
        """Get all palette colors in order."""
        return [getattr(cls, name.upper()) for name in cls.NAMES]

    @classmethod
    def size(cls) -> int:
        return len(cls.NAMES)

    @classmethod
    def color(cls, index: int) -> Tuple[int, int, int]:
        """Get the BGR color at a palette index."""
        return getattr(cls, cls.NAMES[index].upper())

    @classmethod
    def name(cls, index: int) -> str:
        return cls.NAMES[index]

    @classmethod
    def next_index(cls, index: int) -> int:
        """Advance a palette index by one, wrapping around."""
        return (index + 1) % cls.size()


class Canvas:
    """
    Stroke recorder for one drawing surface.

    The in-progress stroke collects points while a gesture is active and
    is frozen into the history when the gesture ends. The history only
    grows at the end and shrinks from the end.
    """

    def __init__(
        self,
        width: int = 400,
        height: int = 600,
        profile: StyleProfile = OVERLAY_PROFILE,
        color_index: int = 1
    ):
        """
        Initialize the canvas.

        Args:
            width: Canvas width in pixels
            height: Canvas height in pixels
            profile: Style controls available for this canvas
            color_index: Starting palette index
        """
        self.width = width
        self.height = height
        self.profile = profile

        # Stroke management
        self._strokes: List[Stroke] = []
        self._current_points: List[Point] = []
        self._is_drawing = False

        # Style state
        self._color_index = color_index % ColorPalette.size()
        self.thickness_control = profile.make_thickness_control()
        self.opacity_control = profile.make_opacity_control()
        self._current_style: Tuple[int, float, float] = self._style_snapshot()

    def _style_snapshot(self) -> Tuple[int, float, float]:
        return (self._color_index, self.thickness_control.value, self.opacity_control.value)

    # Gesture handling
    def begin_gesture(self, point: Point):
        """
        Start a new gesture at the given point.

        Args:
            point: (x, y) starting position in canvas coordinates
        """
        self._is_drawing = True
        self._append(point)

    def continue_gesture(self, point: Point):
        """
        Append a movement point to the gesture in progress.

        Starts a gesture if none is active.

        Args:
            point: (x, y) new position in canvas coordinates
        """
        if not self._is_drawing:
            self.begin_gesture(point)
            return
        self._append(point)

    def _append(self, point: Point):
        # Every movement re-stamps the whole stroke with the current style
        self._current_points.append(point)
        self._current_style = self._style_snapshot()

    def end_gesture(self) -> Optional[Stroke]:
        """
        Finish the gesture and move its stroke into the history.

        Returns:
            The completed stroke, or None if no gesture was active
        """
        if not self._is_drawing:
            return None

        stroke = self.current_stroke
        self._strokes.append(stroke)

        self._current_points = []
        self._current_style = self._style_snapshot()
        self._is_drawing = False
        return stroke

    @property
    def is_drawing(self) -> bool:
        return self._is_drawing

    @property
    def current_stroke(self) -> Stroke:
        """Snapshot of the stroke being drawn (empty when idle)."""
        color_index, thickness, opacity = self._current_style
        return Stroke(
            points=tuple(self._current_points),
            color_index=color_index,
            thickness=thickness,
            opacity=opacity
        )

    @property
    def strokes(self) -> Tuple[Stroke, ...]:
        """Completed strokes in drawing order."""
        return tuple(self._strokes)

    def undo(self) -> bool:
        """
        Remove the most recently completed stroke.

        Returns:
            True if a stroke was removed, False if the history was empty
        """
        if not self._strokes:
            return False
        self._strokes.pop()
        return True

    # Style settings
    @property
    def color_index(self) -> int:
        return self._color_index

    @property
    def color_name(self) -> str:
        return ColorPalette.name(self._color_index)

    @property
    def color(self) -> Tuple[int, int, int]:
        return ColorPalette.color(self._color_index)

    def next_color(self) -> int:
        """Advance to the next palette color and return its index."""
        self._color_index = ColorPalette.next_index(self._color_index)
        return self._color_index

    @property
    def thickness(self) -> float:
        return self.thickness_control.value

    def set_thickness(self, thickness: float) -> float:
        """Set the line thickness (clamped by the thickness control)."""
        return self.thickness_control.set(thickness)

    @property
    def opacity(self) -> float:
        return self.opacity_control.value

    def set_opacity(self, opacity: float) -> float:
        """Set the stroke opacity (clamped by the opacity control)."""
        return self.opacity_control.set(opacity)

    def has_content(self) -> bool:
        """Check if the canvas has any completed strokes."""
        return len(self._strokes) > 0

    def get_stroke_count(self) -> int:
        return len(self._strokes)

    def get_point_count(self) -> int:
        """Get total number of points across all completed strokes."""
        return sum(len(s.points) for s in self._strokes)

    def all_strokes(self) -> Sequence[Stroke]:
        """Completed strokes followed by the in-progress one, for rendering."""
        return self.strokes + (self.current_stroke,)
