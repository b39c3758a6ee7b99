import pytest


class FixedRandom:
    """Random source returning preset values and recording the calls."""

    def __init__(self, jitter: int = 0, offset: int = 0):
        self.jitter = jitter
        self.offset = offset
        self.randint_calls: list[tuple[int, int]] = []
        self.randrange_calls: list[int] = []

    def randint(self, a: int, b: int) -> int:
        self.randint_calls.append((a, b))
        return self.jitter

    def randrange(self, stop: int) -> int:
        self.randrange_calls.append(stop)
        return self.offset


@pytest.fixture
def fixed_random():
    return FixedRandom
