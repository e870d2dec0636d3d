import time
from collections.abc import Callable
from typing import Any

from webextract.schemas.operation_logs.table import OperationLogTable


def elapsed_ms(start: float) -> int:
    """Milliseconds elapsed since `start`, a `time.monotonic()` reading."""
    return int((time.monotonic() - start) * 1000)


def time_and_log_operation(
    operation_logs: OperationLogTable,
    url: str,
    extraction_id: str | None,
    category: str,
    func: Callable[..., Any],
    *args,
    **kwargs,
) -> Any:
    """
    Run `func(*args, **kwargs)` and record its start, end and duration.

    Exceptions raised by `func` are logged as a failed operation and re-raised
    unchanged.
    """
    operation_logs.log_operation(
        url, extraction_id, category, "Started", f"Starting {category}"
    )
    start = time.monotonic()
    try:
        result = func(*args, **kwargs)
    except Exception as e:
        operation_logs.log_operation(
            url,
            extraction_id,
            category,
            "Failed",
            f"{category} failed: {e}",
            elapsed_ms(start),
        )
        raise
    operation_logs.log_operation(
        url,
        extraction_id,
        category,
        "Completed",
        f"{category} completed",
        elapsed_ms(start),
    )
    return result
