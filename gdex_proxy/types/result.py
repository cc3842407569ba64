"""
Result type for best-effort operations

Gas and fee augmentation must never fail a swap, so those steps return a
Result instead of raising. Fallbacks are composed with `or_else`.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")

# Exceptions a mapping function may raise while parsing node output
_PARSE_ERRORS = (ValueError, TypeError, KeyError)


class ResultStatus(Enum):
    """Result status"""
    OK = "ok"
    FAILED = "failed"


@dataclass
class Result(Generic[T]):
    """
    Outcome of an operation that may fail without aborting the request

    Attributes:
        status: OK or FAILED
        value: Result value when OK
        error: The exception when FAILED
    """
    status: ResultStatus
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def is_ok(self) -> bool:
        return self.status == ResultStatus.OK

    @property
    def is_failed(self) -> bool:
        return self.status == ResultStatus.FAILED

    @classmethod
    def ok(cls, value: T) -> "Result[T]":
        """Create successful result"""
        return cls(status=ResultStatus.OK, value=value)

    @classmethod
    def failed(cls, error: Exception) -> "Result[T]":
        """Create failed result"""
        return cls(status=ResultStatus.FAILED, error=error)

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        """Apply fn to the value; parse errors raised by fn become a failed result"""
        if self.is_failed:
            return Result.failed(self.error)
        try:
            return Result.ok(fn(self.value))
        except _PARSE_ERRORS as e:
            return Result.failed(e)

    def and_then(self, fn: Callable[[T], "Result[U]"]) -> "Result[U]":
        """Chain another Result-returning step"""
        if self.is_failed:
            return Result.failed(self.error)
        return fn(self.value)

    def or_else(self, fallback: Callable[[Exception], "Result[T]"]) -> "Result[T]":
        """Recover from a failure with a fallback Result"""
        if self.is_ok:
            return self
        return fallback(self.error)

    def map_error(self, fn: Callable[[Exception], Exception]) -> "Result[T]":
        """Rewrap the error (e.g. into an AugmentationFailure)"""
        if self.is_ok:
            return self
        return Result.failed(fn(self.error))

    def unwrap_or(self, default: Any) -> Any:
        return self.value if self.is_ok else default

    def __str__(self) -> str:
        if self.is_ok:
            return f"Result(OK, {self.value!r})"
        return f"Result(FAILED, error={self.error})"
