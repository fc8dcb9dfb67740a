import pytest

from sortstrip import sorters


def value_for_key(k, blue=0):
    """A value whose sort key is k (r = g = k); blue tags otherwise-equal values."""
    return (k << 24) | (k << 16) | (blue << 8)


class RecordingSink:
    """Collects a copy of every pushed frame."""
    def __init__(self):
        self.delay  = 0
        self.states = []
        self.delays = []

    def push_frame(self, arr):
        self.states.append(list(arr))
        self.delays.append(self.delay)


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture(autouse=True)
def _restore_registry():
    algorithms = list(sorters.ALGORITHMS)
    custom = dict(sorters._custom_generators)
    yield
    sorters.ALGORITHMS[:] = algorithms
    sorters._custom_generators.clear()
    sorters._custom_generators.update(custom)
