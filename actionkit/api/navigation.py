from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse

from actionkit.navigation import NavigationSignal

logger = logging.getLogger(__name__)


async def _navigation_signal_handler(request: Request, exc: NavigationSignal) -> RedirectResponse:
    logger.info("navigation.redirect path=%s url=%s status=%s", request.url.path, exc.url, exc.status_code)
    return RedirectResponse(url=exc.url, status_code=exc.status_code)


def install_navigation_handler(app: FastAPI) -> None:
    """Answer any `NavigationSignal` escaping a route with a redirect response."""

    app.add_exception_handler(NavigationSignal, _navigation_signal_handler)  # type: ignore[arg-type]
