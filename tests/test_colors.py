import random

import numpy as np

from sortstrip.colors import (
    to_color, sort_key, strip_pixels, frame_pixels, greater_than, less_than, PREDICATES,
)


def test_to_color_takes_top_three_bytes():
    assert to_color(0xAABBCCDD) == (0xAA, 0xBB, 0xCC)
    assert to_color(0) == (0, 0, 0)
    assert to_color(0xFFFFFFFF) == (255, 255, 255)


def test_sort_key_counts_green_twice():
    value = (30 << 24) | (60 << 16) | (99 << 8) | 7
    assert sort_key(value) == (30 + 60 + 60) // 3


def test_sort_key_ignores_blue_and_low_byte():
    base = (10 << 24) | (20 << 16)
    assert sort_key(base) == sort_key(base | 0xFFFF)


def test_sort_key_truncates():
    assert sort_key((1 << 24) | (0 << 16)) == 0
    assert sort_key((2 << 24) | (0 << 16)) == 0
    assert sort_key((0 << 24) | (2 << 16)) == 1


def test_sort_key_is_pure():
    value = 0x12345678
    assert sort_key(value) == sort_key(value)
    assert value == 0x12345678


def test_strip_pixels_matches_to_color():
    rng = random.Random(7)
    values = [rng.getrandbits(32) for _ in range(64)]
    px = strip_pixels(values)
    assert px.shape == (64, 3)
    assert px.dtype == np.uint8
    assert [tuple(p) for p in px.tolist()] == [to_color(v) for v in values]


def test_strip_pixels_empty():
    assert strip_pixels([]).shape == (0, 3)


def test_frame_pixels_repeats_strip():
    values = [0xFF000000, 0x00FF0000, 0x0000FF00]
    frame = frame_pixels(values, 4)
    assert frame.shape == (4, 3, 3)
    for row in frame:
        assert (row == strip_pixels(values)).all()


def test_predicates():
    assert greater_than(2, 1) and not greater_than(1, 1)
    assert less_than(1, 2) and not less_than(1, 1)
    assert PREDICATES == {"greater": greater_than, "less": less_than}
