import pytest

from draggesture.canvas import Canvas, ColorPalette, Stroke


def draw(canvas, points):
    canvas.begin_gesture(points[0])
    for point in points[1:]:
        canvas.continue_gesture(point)
    return canvas.end_gesture()


class TestColorPalette:

    def test_has_ten_colors(self):
        assert ColorPalette.size() == 10
        assert len(ColorPalette.get_all()) == 10

    def test_order_matches_names(self):
        assert ColorPalette.name(0) == "black"
        assert ColorPalette.name(1) == "blue"
        assert ColorPalette.name(9) == "white"
        assert ColorPalette.color(9) == (255, 255, 255)

    @pytest.mark.parametrize("index", range(10))
    def test_next_index_wraps(self, index):
        assert ColorPalette.next_index(index) == (index + 1) % 10


class TestPaletteCycling:

    def test_starts_on_blue(self, canvas):
        assert canvas.color_index == 1
        assert canvas.color_name == "blue"

    @pytest.mark.parametrize("start", range(10))
    def test_one_activation_advances_by_one(self, start):
        canvas = Canvas(color_index=start)
        assert canvas.next_color() == (start + 1) % 10
        assert canvas.color_index == (start + 1) % 10

    @pytest.mark.parametrize("start", range(10))
    def test_ten_activations_return_to_start(self, start):
        canvas = Canvas(color_index=start)
        for _ in range(10):
            canvas.next_color()
        assert canvas.color_index == start


class TestStrokeAccumulation:

    def test_points_kept_in_order(self, canvas):
        points = [(i, i * 2) for i in range(7)]
        canvas.begin_gesture(points[0])
        for point in points[1:]:
            canvas.continue_gesture(point)

        assert canvas.is_drawing
        assert canvas.current_stroke.points == tuple(points)
        assert len(canvas.current_stroke) == 7

    def test_end_moves_exact_stroke_to_history(self, canvas):
        canvas.begin_gesture((1, 1))
        canvas.continue_gesture((2, 3))
        in_progress = canvas.current_stroke

        completed = canvas.end_gesture()

        assert completed == in_progress
        assert canvas.strokes == (in_progress,)
        assert canvas.current_stroke.is_empty()
        assert not canvas.is_drawing

    def test_no_smoothing_or_dedup(self, canvas):
        points = [(5, 5), (5, 5), (100, 0), (5, 5)]
        stroke = draw(canvas, points)
        assert stroke.points == tuple(points)

    def test_single_point_gesture_still_recorded(self, canvas):
        canvas.begin_gesture((3, 4))
        canvas.end_gesture()
        assert canvas.get_stroke_count() == 1
        assert canvas.strokes[0].points == ((3, 4),)

    def test_end_without_gesture_is_noop(self, canvas):
        assert canvas.end_gesture() is None
        assert canvas.get_stroke_count() == 0

    def test_continue_starts_gesture(self, canvas):
        canvas.continue_gesture((9, 9))
        assert canvas.is_drawing
        assert canvas.current_stroke.points == ((9, 9),)

    def test_stroke_takes_style_of_last_movement(self, canvas):
        canvas.begin_gesture((0, 0))
        canvas.set_thickness(20)
        canvas.next_color()
        canvas.continue_gesture((1, 1))
        stroke = canvas.end_gesture()

        assert stroke.thickness == 20
        assert stroke.color_index == 2
        assert stroke.opacity == 0.5

    def test_style_change_after_last_move_not_applied(self, canvas):
        canvas.begin_gesture((0, 0))
        canvas.set_thickness(12)
        stroke = canvas.end_gesture()
        assert stroke.thickness == 5

    def test_completed_strokes_are_immutable(self, canvas):
        stroke = draw(canvas, [(0, 0), (1, 1)])
        with pytest.raises(AttributeError):
            stroke.points = ()

    def test_point_count(self, canvas):
        draw(canvas, [(0, 0), (1, 1), (2, 2)])
        draw(canvas, [(0, 0)])
        assert canvas.get_point_count() == 4


class TestUndo:

    def test_undo_on_empty_history_is_noop(self, canvas):
        assert canvas.undo() is False
        assert canvas.get_stroke_count() == 0

    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_undo_removes_last_stroke_only(self, canvas, count):
        for i in range(count):
            draw(canvas, [(i, 0), (i, 10)])
        before = canvas.strokes

        assert canvas.undo() is True
        assert canvas.strokes == before[:-1]

    def test_undo_until_empty(self, canvas):
        draw(canvas, [(0, 0), (1, 1)])
        draw(canvas, [(2, 2), (3, 3)])
        assert canvas.undo()
        assert canvas.undo()
        assert not canvas.undo()
        assert not canvas.has_content()

    def test_undo_leaves_in_progress_stroke(self, canvas):
        draw(canvas, [(0, 0), (1, 1)])
        canvas.begin_gesture((4, 4))
        canvas.undo()
        assert canvas.current_stroke.points == ((4, 4),)


def test_draw_two_strokes_then_undo():
    canvas = Canvas()

    canvas.begin_gesture((0, 0))
    canvas.continue_gesture((10, 10))
    canvas.end_gesture()

    canvas.begin_gesture((5, 5))
    canvas.end_gesture()

    canvas.undo()

    expected = Stroke(points=((0, 0), (10, 10)), color_index=1, thickness=5, opacity=0.5)
    assert canvas.strokes == (expected,)
    assert canvas.current_stroke.is_empty()
    assert canvas.color_index == 1


def test_all_strokes_ends_with_current(canvas):
    draw(canvas, [(0, 0), (1, 1)])
    canvas.begin_gesture((7, 7))
    strokes = canvas.all_strokes()
    assert len(strokes) == 2
    assert strokes[-1].points == ((7, 7),)
