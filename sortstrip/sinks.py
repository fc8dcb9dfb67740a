import numpy as np
from dataclasses import dataclass
from PIL import Image

from sortstrip.colors import strip_pixels, frame_pixels

# ============================================================
# ======================= SINK SETTINGS ======================
# ============================================================

PPM_MAX_VALUE    = 255
PPM_ROWS_FIELD   = 10      # digits reserved for the row count in the P3 header
GIF_PALETTE_BITS = 8       # fixed quantization depth -> 256 colours
FRAME_DELAY      = 10      # hundredths of a second


class FrameSinkError(OSError):
    """The output file could not be created."""


@dataclass
class SinkConfig:
    path:   str
    width:  int                 # = array length
    height: int                 # strip height in pixels
    delay:  int = FRAME_DELAY   # animated variant only, hundredths of a second


# ============================================================
# ========================= FRAME SINK =======================
# ============================================================
#
# LIFECYCLE
# =========
#   open()        -> file handle owned by the sink, PPM header written
#   push_frame()  -> any number of times, including zero
#   close()       -> PPM row count patched / GIF encoded, handle released
#
# Use it as a context manager so close() runs however the sort ends.
# A partially written file is left on disk if a write fails.


class FrameSink:
    extension = ""

    def __init__(self, config: SinkConfig):
        self.config = config
        self.delay  = config.delay
        self.frames = 0
        self._fp    = None

    @property
    def path(self):
        return self.config.path

    def open(self):
        if not self.path:
            raise FrameSinkError("No output path given")
        try:
            self._fp = self._open_file(self.path)
        except OSError as e:
            raise FrameSinkError(f"Error opening {self.path}: {e}") from e
        self._write_header()
        return self

    def push_frame(self, arr):
        self._write_frame(arr)
        self.frames += 1

    def close(self):
        if self._fp is None:
            return
        try:
            self._write_trailer()
        finally:
            self._fp.close()
            self._fp = None

    def __enter__(self):
        if self._fp is None:
            self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    # -- variant hooks --
    def _open_file(self, path):
        raise NotImplementedError

    def _write_header(self):
        pass

    def _write_frame(self, arr):
        raise NotImplementedError

    def _write_trailer(self):
        pass


class PPMSink(FrameSink):
    """
    Static strip image: plain-text P3, every frame stacked under the last.

    Each frame is `height` copies of one row. A pixel is written as
    "R G B" followed by a space, or by a newline on the last pixel of a row.
    The row count is unknown until close(), so the header reserves a
    fixed-width field and close() rewrites it in place.
    """
    extension = ".ppm"

    def _open_file(self, path):
        return open(path, "w", newline="\n")

    def _header(self, rows):
        return f"P3\n{self.config.width} {rows:>{PPM_ROWS_FIELD}}\n{PPM_MAX_VALUE}\n"

    def _write_header(self):
        self._fp.write(self._header(0))

    def _write_frame(self, arr):
        row = " ".join(f"{r} {g} {b}" for r, g, b in strip_pixels(arr).tolist())
        if row:
            row += "\n"
        self._fp.write(row * self.config.height)

    def _write_trailer(self):
        self._fp.flush()
        self._fp.seek(0)
        self._fp.write(self._header(self.frames * self.config.height))
        self._fp.flush()


class GIFSink(FrameSink):
    """
    Animated strip: pushed states become GIF frames on a fixed 8-bit palette.

    Each push is quantized straight away and kept as a P-mode image with
    the delay that was current at the time; close() encodes them with Pillow.

    Dedup merging: Pillow folds a frame identical to the one before it into
    that frame and adds the durations together. A pass that changes nothing
    (selection's extra final frame, the closing frame of every run, an
    idle bubble or radix pass) therefore shows up as a longer hold rather
    than a separate frame. Total play time always equals the sum of the
    pushed delays.

    Nothing reaches the file before close(), so a run that dies mid-sort
    leaves an empty .gif behind.
    """
    extension = ".gif"

    def __init__(self, config: SinkConfig):
        super().__init__(config)
        self._images = []
        self._delays = []

    def _open_file(self, path):
        return open(path, "wb")

    def _quantize(self, px):
        return Image.fromarray(px).quantize(colors=1 << GIF_PALETTE_BITS)

    def _write_frame(self, arr):
        self._images.append(self._quantize(frame_pixels(arr, self.config.height)))
        self._delays.append(self.delay)

    def _write_trailer(self):
        frames, delays = self._images, self._delays
        if not frames:
            blank = np.zeros((self.config.height, self.config.width, 3), dtype=np.uint8)
            frames, delays = [self._quantize(blank)], [self.delay]

        frames[0].save(
            self._fp,
            format="GIF",
            save_all=True,
            append_images=frames[1:],
            duration=[d * 10 for d in delays],   # Pillow wants milliseconds
        )
        self._images, self._delays = [], []


SINKS = {
    "ppm": PPMSink,
    "gif": GIFSink,
}


def open_sink(fmt: str, config: SinkConfig) -> FrameSink:
    if fmt not in SINKS:
        raise KeyError(f"Unknown output format: {fmt}")
    return SINKS[fmt](config).open()
