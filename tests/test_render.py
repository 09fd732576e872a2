import numpy as np

from draggesture.canvas import Stroke
from draggesture.render import draw_stroke, draw_strokes, stroke_mask


def horizontal(opacity=1.0, color_index=0, y=20):
    return Stroke(
        points=((5, y), (55, y)), color_index=color_index,
        thickness=3, opacity=opacity
    )


def test_degenerate_strokes_draw_nothing(white_image):
    before = white_image.copy()
    draw_stroke(white_image, Stroke(points=()))
    draw_stroke(white_image, Stroke(points=((10, 10),), thickness=20, opacity=1.0))
    assert np.array_equal(white_image, before)


def test_single_point_mask_is_empty():
    mask = stroke_mask(Stroke(points=((3, 3),), thickness=10), (20, 20))
    assert mask.max() == 0


def test_opaque_stroke_covers_its_path(white_image):
    draw_stroke(white_image, horizontal())
    assert white_image[20, 30].max() <= 5
    # Far from the line stays untouched
    assert np.array_equal(white_image[2, 30], [255, 255, 255])


def test_opacity_blends_with_background(white_image):
    draw_stroke(white_image, horizontal(opacity=0.5))
    assert abs(int(white_image[20, 30, 0]) - 128) <= 5


def test_zero_opacity_leaves_image_alone(white_image):
    before = white_image.copy()
    draw_stroke(white_image, horizontal(opacity=0.0))
    assert np.array_equal(white_image, before)


def test_stroke_color_is_bgr_palette_entry(white_image):
    red = 7
    draw_stroke(white_image, horizontal(color_index=red))
    assert np.array_equal(white_image[20, 30], [48, 59, 255])


def test_offset_shifts_stroke(white_image):
    draw_stroke(white_image, horizontal(y=5), offset=(0, 20))
    assert white_image[25, 30].max() <= 5
    assert np.array_equal(white_image[5, 30], [255, 255, 255])


def test_stroke_outside_image_is_clipped(white_image):
    before = white_image.copy()
    outside = Stroke(points=((500, 500), (600, 600)), thickness=5, opacity=1.0)
    draw_stroke(white_image, outside)
    assert np.array_equal(white_image, before)


def test_later_strokes_on_top(white_image):
    black = horizontal(color_index=0)
    white = horizontal(color_index=9)
    draw_strokes(white_image, [black, white])
    assert np.array_equal(white_image[20, 30], [255, 255, 255])
