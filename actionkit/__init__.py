"""Validated action dispatch: normalize, validate, authenticate, run, fold.

Kept free of any web framework; `actionkit.api` holds the FastAPI glue.
"""

from actionkit.actions import (
    ActionConfig,
    ActionDefinitionError,
    ActionError,
    ActionResult,
    InputShape,
    ValidatedAction,
    define_validated_action,
    validated_action,
)
from actionkit.core.try_catch import Outcome, try_catch
from actionkit.data_access import DataAccessFunction, define_data_access_function
from actionkit.navigation import NavigationSignal, is_navigation_signal, redirect

__all__ = [
    "ActionConfig",
    "ActionDefinitionError",
    "ActionError",
    "ActionResult",
    "DataAccessFunction",
    "InputShape",
    "NavigationSignal",
    "Outcome",
    "ValidatedAction",
    "define_data_access_function",
    "define_validated_action",
    "is_navigation_signal",
    "redirect",
    "try_catch",
    "validated_action",
]
