import time
from typing import Callable, Optional


class Timer:

    def __init__(self, nano_clock: Optional[Callable[[], int]] = None):
        """
        Start a wall-clock timer.

        :param nano_clock: Optional nanosecond clock function. Defaults to time.perf_counter_ns
        """
        self.nano_clock = nano_clock if nano_clock is not None else time.perf_counter_ns
        self.start_time = self.nano_clock()
        self.stop_time: Optional[int] = None

    def stop(self) -> int:
        """Freeze the timer and return the elapsed nanoseconds."""
        self.stop_time = self.nano_clock()
        return self.elapsed_nanos()

    def elapsed_nanos(self) -> int:
        end = self.stop_time if self.stop_time is not None else self.nano_clock()
        return end - self.start_time

    def elapsed_seconds(self) -> float:
        return self.elapsed_nanos() / 1_000_000_000
