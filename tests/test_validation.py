from __future__ import annotations

from typing import Annotated

import pytest
from pydantic import BaseModel, model_validator
from starlette.datastructures import FormData

from actionkit.forms import FormInputError, flatten_form
from actionkit.validation import ROOT_KEY, PayloadValidator, ValidationFailure, ValidationSuccess, validate


class Address(BaseModel):
    city: str


class Person(BaseModel):
    name: str
    address: Address
    tags: list[str] = []


class Range(BaseModel):
    low: int
    high: int

    @model_validator(mode="after")
    def _ordered(self) -> "Range":
        if self.low > self.high:
            raise ValueError("low must not exceed high")
        return self


def test_success_returns_parsed_data() -> None:
    res = validate(Person, {"name": "Ann", "address": {"city": "Oslo"}})

    assert isinstance(res, ValidationSuccess)
    assert res.success is True
    assert res.data == Person(name="Ann", address=Address(city="Oslo"))


def test_nested_paths_are_dotted() -> None:
    res = validate(Person, {"name": "Ann", "address": {}, "tags": ["a", 2]})

    assert isinstance(res, ValidationFailure)
    assert res.success is False
    assert res.field_errors == {
        "address.city": ["Field required"],
        "tags.1": ["Input should be a valid string"],
    }


def test_whole_payload_errors_use_root_key() -> None:
    res = validate(Range, {"low": 5, "high": 1})

    assert isinstance(res, ValidationFailure)
    assert res.field_errors == {ROOT_KEY: ["Value error, low must not exceed high"]}


def test_non_mapping_payload_for_a_model() -> None:
    res = validate(Person, None)

    assert isinstance(res, ValidationFailure)
    assert list(res.field_errors) == [ROOT_KEY]


def test_type_adapter_schemas() -> None:
    ok = validate(list[int], ["1", 2])
    bad = validate(list[int], ["x"])

    assert isinstance(ok, ValidationSuccess) and ok.data == [1, 2]
    assert isinstance(bad, ValidationFailure) and list(bad.field_errors) == ["0"]


@pytest.mark.parametrize(
    ("form", "expected"),
    [
        (FormData([("name", "John")]), {"name": "John"}),
        (FormData([("tag", "a"), ("tag", "b")]), {"tag": "b"}),
        ({"name": "John"}, {"name": "John"}),
        ([("a", "1"), ("a", "2"), ("b", "3")], {"a": "2", "b": "3"}),
        (None, {}),
    ],
)
def test_flatten_form(form: object, expected: dict[str, str]) -> None:
    assert flatten_form(form) == expected


@pytest.mark.parametrize("form", ["abc", b"abc", 42, [("a", "b", "c")], [("a",)], [1]])
def test_flatten_form_rejects_non_form_input(form: object) -> None:
    with pytest.raises(FormInputError):
        flatten_form(form)


def test_validator_accepts_unhashable_schema() -> None:
    validator = PayloadValidator(Annotated[dict, {"a": 1}])

    ok = validator.validate({"x": 1})
    bad = validator.validate("nope")

    assert isinstance(ok, ValidationSuccess) and ok.data == {"x": 1}
    assert isinstance(bad, ValidationFailure) and list(bad.field_errors) == [ROOT_KEY]
