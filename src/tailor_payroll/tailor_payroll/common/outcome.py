"""Per-unit results for batch operations.

Bulk commission and bulk payroll generation map every unit of work to an
``Outcome`` and hand the caller a ``BatchOutcome`` partitioned into
successes and failures.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K")


@dataclass(frozen=True)
class Outcome(Generic[K, T]):
    key: K
    value: Optional[T] = None
    error: Optional[Exception] = None

    @classmethod
    def success(cls, key: K, value: T) -> "Outcome[K, T]":
        return cls(key=key, value=value)

    @classmethod
    def failure(cls, key: K, error: Exception) -> "Outcome[K, T]":
        return cls(key=key, error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BatchOutcome(Generic[K, T]):
    successes: list[T] = field(default_factory=list)
    failures: list[Outcome[K, T]] = field(default_factory=list)

    @classmethod
    def partition(cls, outcomes: Iterable[Outcome[K, T]]) -> "BatchOutcome[K, T]":
        successes: list[T] = []
        failures: list[Outcome[K, T]] = []
        for o in outcomes:
            if o.ok:
                successes.append(o.value)
            else:
                failures.append(o)
        return cls(successes=successes, failures=failures)

    @property
    def failed_keys(self) -> list[K]:
        return [f.key for f in self.failures]

    def __len__(self) -> int:
        return len(self.successes)


def run_isolated(key: K, fn: Callable[[], T]) -> Outcome[K, T]:
    """Run one unit of a batch; any domain or store failure becomes a failed Outcome."""
    try:
        return Outcome.success(key, fn())
    except Exception as exc:
        return Outcome.failure(key, exc)
