"""Wall-clock timing for the pixel passes.

Provides:
    - timer(): context manager reporting elapsed seconds to a sink

Used to measure threshold conversion over large bitmaps, where cost grows
with pixel count. Shape generation and orientation fixes are bounded and
are not timed.
"""

import logging
import time
from contextlib import contextmanager
from typing import Callable, Optional

logger = logging.getLogger(__name__)


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer label
    sink : Optional[Callable[[str, float], None]]
        Callback(name, elapsed_seconds). If None, the timing is logged at
        DEBUG level.

    Examples
    --------
    >>> with timer("threshold"):
    ...     convert_to_black_and_white(buffer)

    >>> timings = []
    >>> with timer("threshold", sink=lambda n, t: timings.append(t)):
    ...     convert_to_black_and_white(buffer)
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            logger.debug("%s: %.3f s", name, elapsed)
