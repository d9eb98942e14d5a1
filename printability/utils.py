import logging
import math
import time
from contextlib import contextmanager
from decimal import Context, Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)

DECIMAL_PLACES = 3

# Wide enough to quantize any finite double
_CONTEXT = Context(prec=400)


@contextmanager
def timed_stage(name: str):
    """
    Context manager to log timing for an analysis stage at debug level.
    """
    logger.debug("[%s] started...", name)
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        logger.debug("[%s] finished in %.3f s", name, dt)


def round_number(value: float, decimals: int = DECIMAL_PLACES) -> float:
    """
    Round half away from zero to a fixed number of decimals.

    Rounding works on the shortest decimal representation of the float, so
    1.0005 rounds to 1.001 regardless of its binary expansion. A zero result
    is always +0.0.
    """
    value = float(value)
    if not math.isfinite(value):
        return value

    quantum = Decimal(1).scaleb(-decimals)
    result = float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP, context=_CONTEXT))
    return 0.0 if result == 0 else result
