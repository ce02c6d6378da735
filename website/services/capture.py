import io
from typing import Callable, TextIO, Tuple, TypeVar

T = TypeVar("T")


def capture(work: Callable[[TextIO], T]) -> Tuple[str, T]:
    """Run *work* once with a fresh writer and return ``(written text, return value)``.

    The writer belongs to this call only, so nested captures unwind in order.
    It is closed on every exit path; if *work* raises, nothing it wrote
    escapes.
    """
    buffer = io.StringIO()
    try:
        value = work(buffer)
        return buffer.getvalue(), value
    finally:
        buffer.close()
