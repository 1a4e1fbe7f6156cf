from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class FormInputError(ValueError):
    """Raised when a payload cannot be read as form-encoded key/value pairs."""


def flatten_form(form: Any) -> dict[str, Any]:
    """Flatten form-encoded input into a plain dict.

    Accepts a starlette `FormData` (anything exposing `multi_items()`), a
    mapping, or an iterable of `(key, value)` pairs. For a repeated key the
    last value wins. Values, including `UploadFile`s, are passed through as-is.

    Anything else (a bare string, a number, items that are not pairs) raises
    `FormInputError`.
    """

    if form is None:
        return {}

    if hasattr(form, "multi_items"):
        items: Iterable[Any] = form.multi_items()
    elif isinstance(form, Mapping):
        items = form.items()
    elif isinstance(form, (str, bytes, bytearray)) or not isinstance(form, Iterable):
        raise FormInputError(f"Expected form data, got {type(form).__name__}")
    else:
        items = form

    out: dict[str, Any] = {}
    for item in items:
        if isinstance(item, (str, bytes)) or not isinstance(item, (tuple, list)) or len(item) != 2:
            raise FormInputError(f"Expected (key, value) pairs, got {item!r}")
        key, value = item
        out[str(key)] = value
    return out
