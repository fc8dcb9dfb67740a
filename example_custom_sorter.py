# ============================================================
# sortstrip - Custom Sorter Template
# ============================================================
#
# Rules:
#   1. Define a function called  sort(arr, cmp)
#   2. It must be a generator that yields arr after every step
#      that should show up as a frame in the output image.
#   3. Mutate `arr` in-place - do NOT return a new list.
#   4. Compare sort keys, not raw values:  cmp(sort_key(a), sort_key(b))
#   5. Optionally set NAME = "My Algorithm"  (used as display name)
#
# Load this file with:  sortstrip --load example_custom_sorter.py
# ============================================================

from sortstrip.colors import sort_key

NAME = "Insertion Sort"   # <-- change this to whatever you like


def sort(arr, cmp):
    """Insertion Sort - one frame per inserted element."""
    for i in range(1, len(arr)):
        item = arr[i]; j = i - 1
        while j >= 0 and cmp(sort_key(arr[j]), sort_key(item)):
            arr[j+1] = arr[j]; j -= 1
        arr[j+1] = item
        yield arr
