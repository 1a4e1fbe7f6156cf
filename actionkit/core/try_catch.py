from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, overload

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Either the value a computation produced or the exception it raised.

    Discriminate on `failure`, never on the truthiness of `value`: a successful
    computation may well return `0`, `""` or `None`.
    """

    value: T | None = None
    failure: Exception | None = None

    def __post_init__(self) -> None:
        if self.failure is not None and self.value is not None:
            raise ValueError("Outcome cannot hold both a value and a failure")

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value, failure=None)

    @classmethod
    def from_failure(cls, failure: Exception) -> "Outcome[T]":
        if failure is None:
            raise ValueError("A failed outcome requires an exception")
        return cls(value=None, failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def failed(self) -> bool:
        return self.failure is not None

    def unwrap(self) -> T:
        if self.failure is not None:
            raise self.failure
        return self.value  # type: ignore[return-value]


async def _trap_awaitable(awaitable: Awaitable[T]) -> Outcome[T]:
    try:
        value = await awaitable
    except Exception as e:
        return Outcome.from_failure(e)
    return Outcome.success(value)


@overload
def try_catch(target: Awaitable[T]) -> Coroutine[Any, Any, Outcome[T]]: ...


@overload
def try_catch(target: Callable[[], T]) -> Outcome[T]: ...


def try_catch(target: Any) -> Any:
    """Run a computation and capture any exception into an `Outcome`.

    - `try_catch(fn)` calls the zero-argument `fn` and returns an `Outcome`.
    - `try_catch(awaitable)` returns a coroutine; awaiting it yields an `Outcome`.

    Example:
        outcome = try_catch(lambda: int("42"))     # Outcome(value=42, failure=None)
        outcome = await try_catch(fetch_user(1))   # never raises

    Only `Exception` subclasses are trapped; cancellation and interpreter exit
    still propagate.
    """

    if inspect.isawaitable(target):
        return _trap_awaitable(target)

    if callable(target):
        try:
            value = target()
        except Exception as e:
            return Outcome.from_failure(e)
        return Outcome.success(value)

    raise TypeError(f"try_catch expects a callable or an awaitable, got {type(target).__name__}")
