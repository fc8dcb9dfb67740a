import numpy as np

# ============================================================
# ======================= VALUE / COLOR ======================
# ============================================================
#
# A value is a 32-bit unsigned int doing double duty as a pixel:
#
#   bits 31..24  red
#   bits 23..16  green
#   bits 15..8   blue
#   bits  7..0   unused (the PPM writer puts the pixel terminator here)
#
# SORT KEY — every algorithm compares keys, never raw values:
#   key = (r + g + g) // 3
#   Green is counted twice. It is not a luminance average and must stay
#   this way or existing images stop matching.


def to_color(value: int) -> tuple:
    """Split a value into its (r, g, b) channels."""
    return (value >> 24) & 0xFF, (value >> 16) & 0xFF, (value >> 8) & 0xFF


def sort_key(value: int) -> int:
    r, g, _ = to_color(value)
    return (r + g + g) // 3


def greater_than(a: int, b: int) -> bool:
    return a > b


def less_than(a: int, b: int) -> bool:
    return a < b


PREDICATES = {
    "greater": greater_than,
    "less":    less_than,
}


def strip_pixels(values) -> np.ndarray:
    """
    Colours of a whole array as an (n, 3) uint8 block.
    Same channels as to_color, done with numpy shifts.
    """
    v = np.asarray(values, dtype=np.uint32).reshape(-1)
    out = np.empty((v.size, 3), dtype=np.uint8)
    out[:, 0] = (v >> 24) & 0xFF
    out[:, 1] = (v >> 16) & 0xFF
    out[:, 2] = (v >> 8) & 0xFF
    return out


def frame_pixels(values, height: int) -> np.ndarray:
    """One frame: the strip stacked `height` times -> (height, n, 3)."""
    strip = strip_pixels(values)
    return np.repeat(strip[np.newaxis, :, :], height, axis=0)
