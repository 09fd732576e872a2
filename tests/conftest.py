import numpy as np
import pytest

from draggesture.canvas import Canvas
from draggesture.config import AppConfig
from draggesture.controls import CARD_PROFILE, OVERLAY_PROFILE


@pytest.fixture
def canvas():
    return Canvas(width=200, height=300, profile=OVERLAY_PROFILE)


@pytest.fixture
def card_canvas():
    return Canvas(width=200, height=300, profile=CARD_PROFILE)


@pytest.fixture
def white_image():
    return np.full((40, 60, 3), 255, dtype=np.uint8)


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def app_config():
    return AppConfig()
