"""Simulated monotonic clock for headless runs and tests.

Anything that accepts a ``clock`` callable uses ``time.monotonic`` by
default; pass a ``ManualClock`` instead to advance time by hand.
"""


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        """Move time forward.

        Args:
            seconds: Non-negative amount to advance

        Returns:
            New current time

        Raises:
            ValueError: If seconds is negative
        """
        if seconds < 0:
            raise ValueError(f"Clock cannot go backwards: {seconds}")
        self.now += seconds
        return self.now
