import importlib.util
import inspect
import os

from sortstrip.colors import sort_key

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================
#
# Every algorithm is a generator  algo(arr, cmp)  that mutates `arr` in
# place and yields `arr` once per visible step. One yield is one frame,
# so where the yields sit decides the pacing of the animation:
#
#   bubble     after each full outer pass               n-1 frames
#   selection  after each placement, plus one at the end  n frames
#   heap       after each build-phase heapify, then after each extraction
#   merge      after each merge                          n-1 frames
#   lsd_radix  after each base-10 digit pass
#
# `cmp` takes two sort keys. Algorithms never compare raw values.
# With greater_than the comparison sorts come out ascending, with
# less_than descending. Radix ignores `cmp` and is always ascending.

RADIX_BASE = 10


class PreconditionViolation(Exception):
    """An algorithm was called without a comparison predicate."""


def _require(cmp):
    if cmp is None:
        raise PreconditionViolation("comparison predicate is required")


def bubble_sort(arr, cmp):
    _require(cmp)
    n = len(arr)
    for i in range(n - 1):
        for j in range(n - i - 1):
            if cmp(sort_key(arr[j]), sort_key(arr[j+1])):
                arr[j], arr[j+1] = arr[j+1], arr[j]
        yield arr


def selection_sort(arr, cmp):
    # The candidate moves on `not cmp`, so greater_than selects the minimum
    # and less_than the maximum. Equal keys move it too (last one wins).
    _require(cmp)
    n = len(arr)
    for i in range(n - 1):
        best = i
        for j in range(i + 1, n):
            if not cmp(sort_key(arr[j]), sort_key(arr[best])):
                best = j
        if best != i:
            arr[i], arr[best] = arr[best], arr[i]
        yield arr
    yield arr


def heapify(arr, n, i, cmp):
    """Sift arr[i] down within the first n slots."""
    _require(cmp)
    top, l, r = i, 2*i + 1, 2*i + 2
    if l < n and cmp(sort_key(arr[l]), sort_key(arr[top])): top = l
    if r < n and cmp(sort_key(arr[r]), sort_key(arr[top])): top = r
    if top != i:
        arr[i], arr[top] = arr[top], arr[i]
        heapify(arr, n, top, cmp)


def heap_sort(arr, cmp):
    _require(cmp)
    n = len(arr)
    for i in range(n//2 - 1, -1, -1):
        heapify(arr, n, i, cmp)
        yield arr
    for i in range(n - 1, -1, -1):
        arr[0], arr[i] = arr[i], arr[0]
        heapify(arr, i, 0, cmp)
        yield arr


def merge(arr, lo, mid, hi, cmp):
    """Merge arr[lo..mid] and arr[mid+1..hi] back into arr."""
    _require(cmp)
    L = arr[lo:mid+1]; R = arr[mid+1:hi+1]
    i = j = 0; k = lo
    while i < len(L) and j < len(R):
        # left wins unless cmp holds for left-vs-right
        if not cmp(sort_key(L[i]), sort_key(R[j])): arr[k] = L[i]; i += 1
        else:                                        arr[k] = R[j]; j += 1
        k += 1
    while i < len(L): arr[k] = L[i]; i += 1; k += 1
    while j < len(R): arr[k] = R[j]; j += 1; k += 1


def merge_sort(arr, cmp):
    _require(cmp)

    def _ms(lo, hi):
        if lo < hi:
            mid = lo + (hi - lo)//2
            yield from _ms(lo, mid)
            yield from _ms(mid + 1, hi)
            merge(arr, lo, mid, hi, cmp)
            yield arr

    yield from _ms(0, len(arr) - 1)


def counting_pass(arr, exp, base=RADIX_BASE):
    """Stable counting sort of arr on digit (sort_key // exp) % base."""
    n = len(arr); out = [0]*n; cnt = [0]*base
    digits = [(sort_key(v)//exp) % base for v in arr]
    for d in digits: cnt[d] += 1
    for i in range(1, base): cnt[i] += cnt[i-1]
    for i in range(n - 1, -1, -1):
        d = digits[i]; out[cnt[d]-1] = arr[i]; cnt[d] -= 1
    arr[:] = out


def lsd_radix_sort(arr, cmp=None, base=RADIX_BASE):
    if not arr: return
    mv, exp = max(sort_key(v) for v in arr), 1
    while mv//exp > 0:
        counting_pass(arr, exp, base)
        yield arr
        exp *= base


# ============================================================
# ========================= REGISTRY =========================
# ============================================================

# Fixed order used by "all".
ALGORITHMS = [
    ("Bubble Sort",    "bubble"),
    ("Selection Sort", "selection"),
    ("Heap Sort",      "heap"),
    ("Merge Sort",     "merge"),
    ("LSD Radix Sort", "radix"),
]

_custom_generators: dict = {}


def algorithm_keys() -> list:
    return [k for _, k in ALGORITHMS]


def algorithm_label(key: str) -> str:
    for name, k in ALGORITHMS:
        if k == key: return name
    return key


def get_generator(key, arr, cmp):
    builtins = {
        "bubble":    lambda: bubble_sort(arr, cmp),
        "selection": lambda: selection_sort(arr, cmp),
        "heap":      lambda: heap_sort(arr, cmp),
        "merge":     lambda: merge_sort(arr, cmp),
        "radix":     lambda: lsd_radix_sort(arr, cmp),
    }
    if key in builtins:
        _require(cmp)
        return builtins[key]()
    if key in _custom_generators:
        _require(cmp)
        return _custom_generators[key]["fn"](arr, cmp)
    raise KeyError(f"Unknown key: {key}")


def run_sort(key, arr, cmp, sink) -> int:
    """Drive one algorithm to completion, pushing a frame per step."""
    frames = 0
    for state in get_generator(key, arr, cmp):
        sink.push_frame(state)
        frames += 1
    return frames


# ============================================================
# ==================== CUSTOM SORTER LOADER ==================
# ============================================================

def _import_sorter_module(filepath):
    spec = importlib.util.spec_from_file_location("_cs", filepath)
    if spec is None:
        raise ImportError(f"Not a Python file: {filepath}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _check_sorter(module):
    """Error string for a module that can't drive frames, else None."""
    fn = getattr(module, "sort", None)
    if fn is None:
        return "No sort(arr, cmp) function found"
    if not callable(fn):
        return f"sort is not callable ({type(fn).__name__})"
    if not inspect.isgeneratorfunction(fn):
        return "sort(arr, cmp) must be a generator that yields arr"
    try:
        inspect.signature(fn).bind([], None)
    except TypeError:
        return "sort must accept (arr, cmp)"
    name = getattr(module, "NAME", None)
    if name is not None and not isinstance(name, str):
        return f"NAME must be a string, got {type(name).__name__}"
    return None


def load_custom_sorter(filepath: str):
    """
    Load a .py file as a custom sorter.
    Must define: NAME (str, optional) and sort(arr, cmp) generator.
    Returns ((display_name, key), None) on success, (None, error_str) on failure.
    """
    filepath = os.path.abspath(filepath)
    try:
        module = _import_sorter_module(filepath)
    except Exception as e:
        # the file is user code: anything it raises at import is a load failure
        return None, f"{type(e).__name__}: {e}"

    err = _check_sorter(module)
    if err:
        return None, err

    name = getattr(module, "NAME", None) or os.path.splitext(os.path.basename(filepath))[0]
    key  = f"custom_{len(_custom_generators)}"
    _custom_generators[key] = {"fn": module.sort, "path": filepath}
    ALGORITHMS.append((name, key))
    return (name, key), None
