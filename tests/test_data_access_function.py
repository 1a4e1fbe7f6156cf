from __future__ import annotations

from typing import Any

import pytest

from actionkit.data_access import define_data_access_function


async def _auth(mock_user: Any) -> Any:
    return mock_user


@pytest.mark.asyncio
async def test_calls_the_function_without_user() -> None:
    async def _get(param1: str, param2: int) -> str:
        return f"Result: {param1}, {param2}"

    get_data = define_data_access_function(_get)
    outcome = await get_data("test", 42)

    assert outcome.value == "Result: test, 42"
    assert outcome.failure is None


@pytest.mark.asyncio
async def test_returns_the_exception_instead_of_raising() -> None:
    async def _get(param: str) -> str:
        raise RuntimeError(f"Function failed with param {param}")

    outcome = await define_data_access_function(_get)("test")

    assert outcome.value is None
    assert isinstance(outcome.failure, RuntimeError)
    assert str(outcome.failure) == "Function failed with param test"


@pytest.mark.asyncio
async def test_keyword_arguments_are_forwarded() -> None:
    def _get(*, limit: int = 10) -> list[int]:
        return list(range(limit))

    outcome = await define_data_access_function(_get)(limit=3)
    assert outcome.value == [0, 1, 2]


@pytest.mark.asyncio
async def test_auth_failure_propagates() -> None:
    def _unauth() -> Any:
        raise PermissionError("User is not authenticated")

    async def _get() -> str:
        raise AssertionError("Will not be called")

    get_data = define_data_access_function(_get, auth=_unauth)

    with pytest.raises(PermissionError) as e:
        await get_data()
    assert str(e.value) == "User is not authenticated"


@pytest.mark.asyncio
async def test_user_is_passed_first(mock_user: Any) -> None:
    async def _get(user: Any, param1: str, param2: int) -> str:
        return f"{user.id}: {param1}, {param2}"

    get_data = define_data_access_function(_get, auth=lambda: _auth(mock_user))

    assert (await get_data("test", 42)).value == "1: test, 42"


@pytest.mark.asyncio
async def test_user_only_when_no_params(mock_user: Any) -> None:
    async def _get(user: Any) -> str:
        return f"User ID: {user.id}"

    outcome = await define_data_access_function(_get, auth=lambda: mock_user)()

    assert outcome.value == "User ID: 1"
    assert outcome.ok is True


@pytest.mark.asyncio
async def test_function_failure_after_auth_is_returned(mock_user: Any) -> None:
    async def _get(user: Any, param: str) -> str:
        raise ValueError(f"Failed processing for user {user.id} with param {param}")

    outcome = await define_data_access_function(_get, auth=lambda: mock_user)("test")

    assert outcome.failed is True
    assert str(outcome.failure) == "Failed processing for user 1 with param test"


def test_func_must_be_callable() -> None:
    with pytest.raises(TypeError):
        define_data_access_function("nope")  # type: ignore[arg-type]
