from __future__ import annotations

from fastapi import Request
from starlette.datastructures import FormData


async def form_payload(request: Request) -> FormData:
    """Dependency yielding the parsed request form, ready for a `form` action."""

    return await request.form()
