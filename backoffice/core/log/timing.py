"""Duration and throughput logging for store round-trips."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Iterator, Optional


@dataclass
class Timing:
    """Measurement handed to the ``timeit`` block."""

    label: str
    unit: str
    total: Optional[int] = None
    started: float = field(default_factory=perf_counter)
    elapsed: Optional[float] = None

    def set_total(self, total: int) -> None:
        self.total = total

    def stop(self) -> float:
        self.elapsed = perf_counter() - self.started
        return self.elapsed

    def describe(self, outcome: str) -> str:
        elapsed = self.elapsed if self.elapsed is not None else self.stop()
        message = f"{self.label} {outcome} {elapsed * 1000:.1f}ms"
        if self.total is not None:
            message += f" ({self.total:,} {self.unit}"
            if outcome == "completed in" and elapsed > 0 and self.total:
                message += f", {self.total / elapsed:,.0f} {self.unit}/s"
            message += ")"
        return message


@contextmanager
def timeit(
    label: str,
    *,
    logger: Optional[logging.Logger] = None,
    level: int = logging.INFO,
    unit: str = "rows",
    total: Optional[int] = None,
) -> Iterator[Timing]:
    """Log how long the block took and, when known, how many ``unit`` it handled.

    A failing block is reported at ``level`` and the exception re-raised, so
    callers that convert the error into a result own the single error log.
    """

    log = logger or logging.getLogger("backoffice.timing")
    timing = Timing(label=label, unit=unit, total=total)
    try:
        yield timing
    except Exception:
        timing.stop()
        log.log(level, timing.describe("failed after"))
        raise
    timing.stop()
    log.log(level, timing.describe("completed in"))
