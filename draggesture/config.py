"""
Config Module - Application Settings
====================================
Settings read from the environment (a ``.env`` file is loaded by the
entry script) and overridden by command-line flags.
"""

import os
import argparse
from pathlib import Path
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional, Sequence, TypeVar

from draggesture.controls import StyleProfile, PROFILES, get_profile


T = TypeVar("T")

ENV_PREFIX = "DRAGGESTURE_"

DEFAULT_CANVAS_WIDTH = 400
DEFAULT_CANVAS_HEIGHT = 600
DEFAULT_FLIP_DURATION = 3.0


class ConfigError(ValueError):
    """Raised when a setting has an invalid value."""


@dataclass(frozen=True)
class AppConfig:
    """
    Application settings.

    Attributes:
        profile: Style profile name ("overlay" or "card")
        canvas_width: Canvas width in pixels
        canvas_height: Canvas height in pixels
        background_path: Image shown under the strokes
        back_image_path: Image on the back of the flip card
        flip_duration: Seconds per card flip
    """
    profile: str = "overlay"
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT
    background_path: Optional[Path] = None
    back_image_path: Optional[Path] = None
    flip_duration: float = DEFAULT_FLIP_DURATION

    @property
    def style_profile(self) -> StyleProfile:
        return get_profile(self.profile)

    @property
    def canvas_size(self) -> tuple:
        return self.canvas_width, self.canvas_height

    def validate(self) -> "AppConfig":
        """
        Check all values.

        Returns:
            self, for chaining

        Raises:
            ConfigError: On the first invalid value
        """
        if self.profile.strip().lower() not in PROFILES:
            raise ConfigError(
                f"profile: unknown profile '{self.profile}' "
                f"(expected one of: {', '.join(PROFILES)})"
            )
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ConfigError(
                f"canvas size must be positive, got {self.canvas_width}x{self.canvas_height}"
            )
        if self.flip_duration < 0:
            raise ConfigError(f"flip_duration must not be negative, got {self.flip_duration}")
        return self


def _env_value(
    env: Mapping[str, str],
    name: str,
    convert: Callable[[str], T],
    default: T
) -> T:
    key = ENV_PREFIX + name
    raw = env.get(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return convert(raw.strip())
    except ValueError:
        raise ConfigError(f"{key}: invalid value '{raw}'") from None


def config_from_env(env: Optional[Mapping[str, str]] = None) -> AppConfig:
    """
    Build settings from environment variables.

    Args:
        env: Variables to read (defaults to ``os.environ``)

    Returns:
        Validated AppConfig
    """
    if env is None:
        env = os.environ

    config = AppConfig(
        profile=_env_value(env, "PROFILE", str, "overlay"),
        canvas_width=_env_value(env, "CANVAS_WIDTH", int, DEFAULT_CANVAS_WIDTH),
        canvas_height=_env_value(env, "CANVAS_HEIGHT", int, DEFAULT_CANVAS_HEIGHT),
        background_path=_env_value(env, "BACKGROUND", Path, None),
        back_image_path=_env_value(env, "BACK_IMAGE", Path, None),
        flip_duration=_env_value(env, "FLIP_DURATION", float, DEFAULT_FLIP_DURATION),
    )
    return config.validate()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="DragGesture - draw over an image, then flip it like a card"
    )
    parser.add_argument('--profile', choices=sorted(PROFILES), help='Style controls to offer')
    parser.add_argument('--width', type=int, help='Canvas width in pixels')
    parser.add_argument('--height', type=int, help='Canvas height in pixels')
    parser.add_argument('--background', type=Path, help='Image drawn under the strokes')
    parser.add_argument('--back-image', type=Path, help='Image on the back of the card')
    parser.add_argument('--flip-duration', type=float, help='Seconds per card flip')
    return parser


def load_config(
    argv: Optional[Sequence[str]] = None,
    env: Optional[Mapping[str, str]] = None
) -> AppConfig:
    """
    Build settings from the environment, then apply command-line flags.

    Args:
        argv: Command-line arguments (defaults to ``sys.argv[1:]``)
        env: Environment variables (defaults to ``os.environ``)

    Returns:
        Validated AppConfig
    """
    config = config_from_env(env)
    args = build_parser().parse_args(argv)

    overrides = {
        'profile': args.profile,
        'canvas_width': args.width,
        'canvas_height': args.height,
        'background_path': args.background,
        'back_image_path': args.back_image,
        'flip_duration': args.flip_duration,
    }
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return replace(config, **overrides).validate()
