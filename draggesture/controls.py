"""
Controls Module - Bounded Numeric Controls
==========================================
Slider and stepper controls that keep style values inside their
declared ranges, plus the style profiles for each app variant.
"""

from typing import Dict, Optional
from dataclasses import dataclass


class RangeControl:
    """
    A numeric control bounded to [minimum, maximum].

    Behaves as a slider when ``step`` is None and as a stepper otherwise.
    Values outside the range are clamped, never rejected.
    """

    def __init__(
        self,
        minimum: float,
        maximum: float,
        value: float,
        step: Optional[float] = None
    ):
        """
        Initialize the control.

        Args:
            minimum: Lowest accepted value
            maximum: Highest accepted value
            value: Initial value (clamped into range)
            step: Increment for stepper controls, None for sliders
        """
        if minimum > maximum:
            raise ValueError(f"minimum {minimum} is greater than maximum {maximum}")

        self.minimum = minimum
        self.maximum = maximum
        self.step = step
        self._value = minimum
        self.set(value)

    @property
    def value(self) -> float:
        """Current value of the control."""
        return self._value

    @property
    def is_stepper(self) -> bool:
        return self.step is not None

    def set(self, value: float) -> float:
        """
        Set the control value, clamping it into range.

        Args:
            value: Requested value

        Returns:
            The value actually stored
        """
        if self.step:
            value = self.minimum + round((value - self.minimum) / self.step) * self.step
        self._value = max(self.minimum, min(value, self.maximum))
        return self._value

    def increment(self) -> float:
        """Step the value up by one step (1 for sliders)."""
        return self.set(self._value + (self.step or 1))

    def decrement(self) -> float:
        """Step the value down by one step (1 for sliders)."""
        return self.set(self._value - (self.step or 1))

    @property
    def fraction(self) -> float:
        """Position of the value within the range, from 0 to 1."""
        span = self.maximum - self.minimum
        if span == 0:
            return 0.0
        return (self._value - self.minimum) / span

    def from_fraction(self, fraction: float) -> float:
        """Set the value from a 0-1 position within the range."""
        fraction = max(0.0, min(fraction, 1.0))
        return self.set(self.minimum + fraction * (self.maximum - self.minimum))

    def __repr__(self) -> str:
        kind = "stepper" if self.is_stepper else "slider"
        return f"RangeControl({kind}, {self.minimum}..{self.maximum}, value={self._value})"


@dataclass(frozen=True)
class StyleProfile:
    """
    Style controls offered by one variant of the app.

    Attributes:
        name: Profile name used on the command line
        thickness_min: Lowest thickness
        thickness_max: Highest thickness
        thickness_step: Stepper increment, None for a slider
        has_opacity: Whether strokes carry an adjustable opacity
        default_thickness: Starting thickness
        default_opacity: Starting opacity (fixed when has_opacity is False)
    """
    name: str
    thickness_min: float = 1.0
    thickness_max: float = 50.0
    thickness_step: Optional[float] = None
    has_opacity: bool = True
    default_thickness: float = 5.0
    default_opacity: float = 0.5

    def make_thickness_control(self) -> RangeControl:
        return RangeControl(
            self.thickness_min, self.thickness_max,
            self.default_thickness, step=self.thickness_step
        )

    def make_opacity_control(self) -> RangeControl:
        # Without an opacity control strokes are drawn fully opaque
        if not self.has_opacity:
            return RangeControl(1.0, 1.0, 1.0)
        return RangeControl(0.0, 1.0, self.default_opacity)


# Thickness slider in [1, 50] with an opacity slider
OVERLAY_PROFILE = StyleProfile(name="overlay")

# Thickness stepper in [1, 30], no opacity
CARD_PROFILE = StyleProfile(
    name="card",
    thickness_max=30.0,
    thickness_step=1.0,
    has_opacity=False,
    default_opacity=1.0
)

PROFILES: Dict[str, StyleProfile] = {
    OVERLAY_PROFILE.name: OVERLAY_PROFILE,
    CARD_PROFILE.name: CARD_PROFILE,
}


def get_profile(name: str) -> StyleProfile:
    """
    Look up a style profile by name.

    Raises:
        ValueError: If no profile has that name
    """
    try:
        return PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown profile '{name}' (expected one of: {', '.join(PROFILES)})"
        ) from None
