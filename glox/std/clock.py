import time
from typing import Any, List


def std_clock(args: List[Any]) -> Any:
    """Current wall-clock time in fractional seconds."""
    return time.time_ns() / 1_000_000_000
