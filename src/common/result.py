# src/common/result.py
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of one pipeline stage.

    Exactly one of ``value`` (success) or ``stage``/``error`` (failure) is meaningful.
    A failed result is passed straight back up the pipeline; later stages never run.
    """
    ok: bool
    value: Optional[T] = None
    stage: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, stage: str, error: str) -> "Result[Any]":
        return cls(ok=False, stage=stage, error=error)
