import argparse
import os
import random
import sys

from sortstrip.colors import PREDICATES
from sortstrip.sinks import SINKS, FRAME_DELAY, SinkConfig, open_sink
from sortstrip.sorters import (
    algorithm_keys, algorithm_label, load_custom_sorter, run_sort,
)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

ARRAY_SIZE        = 250
OUTPUT_NAME       = "default"
OUTPUT_FORMAT     = "ppm"
SORT_ORDER        = "less"
RADIX_FRAME_DELAY = 70     # radix emits a handful of frames, show each longer
SLOW_FACTOR       = 5

# Strip height per output format. The PPM stacks every frame, so one row
# per state; the GIF shows one state at a time and needs some height.
STRIP_HEIGHT = {
    "ppm": 1,
    "gif": 40,
}

# ============================================================
# ======================= ORCHESTRATION ======================
# ============================================================

def seed_array(n, rng=None):
    """n uniformly random 32-bit values."""
    rng = rng or random.Random()
    return [rng.getrandbits(32) for _ in range(n)]


def frame_delay(key, slow=False):
    delay = RADIX_FRAME_DELAY if key == "radix" else FRAME_DELAY
    return delay * SLOW_FACTOR if slow else delay


def output_path(name, fmt):
    if not name:
        return ""
    ext = SINKS[fmt].extension
    return name if name.lower().endswith(ext) else name + ext


def visualize(keys, values, cmp, sink, slow=False):
    """
    Run each algorithm on its own copy of `values`, appending all frames to
    one sink. Every run is framed by its starting and finished state.
    Returns {key: frames pushed by the algorithm itself}.
    """
    counts = {}
    for key in keys:
        arr = list(values)
        sink.delay = frame_delay(key, slow)
        sink.push_frame(arr)
        counts[key] = run_sort(key, arr, cmp, sink)
        sink.push_frame(arr)
        print(f"  {algorithm_label(key)}: {counts[key]} frames")
    return counts


# ============================================================
# ============================ CLI ===========================
# ============================================================

def _positive_int(text):
    try:
        v = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}")
    if v < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {v}")
    return v


def build_parser():
    p = argparse.ArgumentParser(
        prog="sortstrip",
        description="Sort random colours and write every intermediate state as an image.",
    )
    p.add_argument("-o", "--output", default=OUTPUT_NAME,
                   help="output file name, extension added (default: %(default)s)")
    p.add_argument("-s", "--sort", default="all",
                   help="merge, bubble, selection, heap, radix, a loaded custom_N, or all "
                        "(default: %(default)s)")
    p.add_argument("--slow", action="store_true",
                   help=f"hold each animation frame {SLOW_FACTOR}x longer")
    p.add_argument("-f", "--format", choices=sorted(SINKS), default=OUTPUT_FORMAT,
                   help="output container (default: %(default)s)")
    p.add_argument("-n", "--size", type=_positive_int, default=ARRAY_SIZE,
                   help="number of values to sort (default: %(default)s)")
    p.add_argument("--height", type=_positive_int, default=None,
                   help="strip height in pixels (default: 1 for ppm, 40 for gif)")
    p.add_argument("--order", choices=sorted(PREDICATES), default=SORT_ORDER,
                   help="comparison predicate (default: %(default)s)")
    p.add_argument("--seed", type=int, default=None,
                   help="random seed for the initial array")
    p.add_argument("--load", action="append", default=[], metavar="FILE",
                   help="load a custom sorter file (repeatable)")
    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    for path in args.load:
        result, err = load_custom_sorter(path)
        if err:
            parser.error(f"cannot load sorter {path}: {err}")
        name, key = result
        print(f"Loaded {name} as {key}")

    known = algorithm_keys()
    if args.sort == "all":
        keys = known
    elif args.sort in known:
        keys = [args.sort]
    else:
        parser.error(f"unknown sort {args.sort!r} (choose from {', '.join(known + ['all'])})")

    height = args.height or STRIP_HEIGHT[args.format]
    values = seed_array(args.size, random.Random(args.seed))
    cmp    = PREDICATES[args.order]
    config = SinkConfig(output_path(args.output, args.format), args.size, height)

    try:
        with open_sink(args.format, config) as sink:
            print("Now sorting")
            visualize(keys, values, cmp, sink, slow=args.slow)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Complete and written to {os.path.abspath(config.path)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
