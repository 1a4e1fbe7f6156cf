from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from actionkit.core.try_catch import Outcome, try_catch

T = TypeVar("T")


async def _invoke(func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    value = func(*args, **kwargs)
    if inspect.isawaitable(value):
        value = await value
    return value


class DataAccessFunction(Generic[T]):
    """Callable returned by `define_data_access_function`.

    Returns an `Outcome` rather than raising. Principal resolution is the one
    step that is allowed to raise.
    """

    __slots__ = ("func", "auth")

    def __init__(self, func: Callable[..., Any], auth: Callable[[], Any] | None = None) -> None:
        self.func = func
        self.auth = auth

    async def __call__(self, *params: Any, **kwargs: Any) -> Outcome[T]:
        args = params
        if self.auth is not None:
            principal = self.auth()
            if inspect.isawaitable(principal):
                principal = await principal
            args = (principal, *params)
        return await try_catch(_invoke(self.func, args, kwargs))


def define_data_access_function(
    func: Callable[..., Any],
    *,
    auth: Callable[[], Any] | None = None,
) -> DataAccessFunction[Any]:
    """Wrap a data-access function so its failures come back as values.

    With `auth`, the resolved principal is passed as the first argument:

        get_orders = define_data_access_function(load_orders, auth=current_user)
        outcome = await get_orders("open")   # load_orders(user, "open")
        if outcome.failed:
            ...
    """

    if not callable(func):
        raise TypeError("func must be callable")
    return DataAccessFunction(func, auth)
