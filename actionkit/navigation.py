from __future__ import annotations

from typing import NoReturn

from actionkit.settings import get_settings


class NavigationSignal(Exception):
    """Control-flow escape asking the host to navigate somewhere else.

    Raised from handlers or principal resolvers (e.g. to send an
    unauthenticated caller to a login page). Action dispatch never folds it
    into a result; it always reaches the host.
    """

    def __init__(self, url: str, *, status_code: int = 303) -> None:
        self.url = url
        self.status_code = status_code
        super().__init__(f"{get_settings().navigation_sentinel};{url}")


def redirect(url: str, *, status_code: int = 303) -> NoReturn:
    raise NavigationSignal(url, status_code=status_code)


def is_navigation_signal(exc: BaseException, *, sentinel: str | None = None) -> bool:
    """True for a `NavigationSignal` or any exception carrying the sentinel token.

    The token match keeps foreign redirect exceptions (raised by code that does
    not know about `NavigationSignal`) escaping as well.
    """

    if isinstance(exc, NavigationSignal):
        return True
    token = sentinel or get_settings().navigation_sentinel
    return token in str(exc)
