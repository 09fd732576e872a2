import pytest

from draggesture.controls import (
    CARD_PROFILE, OVERLAY_PROFILE, RangeControl, get_profile
)


class TestRangeControl:

    def test_clamps_below_and_above(self):
        control = RangeControl(1, 50, 5)
        assert control.set(0) == 1
        assert control.set(-100) == 1
        assert control.set(51) == 50
        assert control.set(1000) == 50

    def test_accepts_values_in_range(self):
        control = RangeControl(0.0, 1.0, 0.5)
        assert control.set(0.25) == 0.25
        assert control.value == 0.25

    def test_initial_value_is_clamped(self):
        assert RangeControl(1, 30, 99).value == 30

    def test_rejects_inverted_range(self):
        with pytest.raises(ValueError):
            RangeControl(10, 1, 5)

    def test_stepper_moves_by_step_and_stops_at_bounds(self):
        control = RangeControl(1, 30, 29, step=1)
        assert control.increment() == 30
        assert control.increment() == 30

        control.set(2)
        assert control.decrement() == 1
        assert control.decrement() == 1

    def test_stepper_rounds_to_step(self):
        control = RangeControl(1, 30, 5, step=1)
        assert control.set(7.4) == 7
        assert control.is_stepper

    def test_fraction_round_trip(self):
        control = RangeControl(1, 51, 26)
        assert control.fraction == pytest.approx(0.5)
        assert control.from_fraction(1.0) == 51
        assert control.from_fraction(-3) == 1

    def test_fixed_control_has_zero_fraction(self):
        assert RangeControl(1.0, 1.0, 1.0).fraction == 0.0


class TestProfiles:

    def test_overlay_thickness_bounds(self, canvas):
        assert canvas.set_thickness(0) == 1
        assert canvas.set_thickness(75) == 50
        assert not canvas.thickness_control.is_stepper

    def test_overlay_opacity_bounds(self, canvas):
        assert canvas.set_opacity(-0.5) == 0.0
        assert canvas.set_opacity(1.5) == 1.0
        assert canvas.set_opacity(0.3) == pytest.approx(0.3)

    def test_card_thickness_bounds(self, card_canvas):
        assert card_canvas.set_thickness(0) == 1
        assert card_canvas.set_thickness(31) == 30
        assert card_canvas.thickness_control.is_stepper

    def test_card_has_fixed_full_opacity(self, card_canvas):
        assert card_canvas.opacity == 1.0
        assert card_canvas.set_opacity(0.2) == 1.0

    def test_defaults(self):
        assert OVERLAY_PROFILE.default_thickness == 5
        assert OVERLAY_PROFILE.default_opacity == 0.5
        assert CARD_PROFILE.thickness_max == 30
        assert not CARD_PROFILE.has_opacity

    def test_lookup_by_name(self):
        assert get_profile("overlay") is OVERLAY_PROFILE
        assert get_profile(" Card ") is CARD_PROFILE

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            get_profile("sketchbook")
