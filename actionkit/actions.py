from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from pydantic import PydanticUserError

from actionkit.core.try_catch import Outcome, try_catch
from actionkit.forms import FormInputError, flatten_form
from actionkit.fsm import InvocationFSM
from actionkit.navigation import is_navigation_signal
from actionkit.validation import ROOT_KEY, FieldErrors, PayloadValidator, Schema, ValidationFailure

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Handler signatures, by shape and auth:
#   form/object + auth: (data, principal)    form/object: (data)
#   null + auth:        (principal)          null:        ()
# Handlers may be `async def` or plain functions.
Handler = Callable[..., Any]

# Returns the principal (or an awaitable of it). Expected to raise a
# NavigationSignal for unauthenticated callers.
AuthFunction = Callable[[], Any]

# Called with the handler's exception, e.g. to report it to an error tracker.
ErrorObserver = Callable[[Exception], Any]


class InputShape(StrEnum):
    FORM = "form"
    OBJECT = "object"
    NONE = "null"


class ActionDefinitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class ActionError:
    """Either validation errors per field, or the message of an exception."""

    field_errors: FieldErrors | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if (self.field_errors is None) == (self.message is None):
            raise ValueError("ActionError needs exactly one of field_errors or message")

    def to_dict(self) -> dict[str, Any]:
        if self.field_errors is not None:
            return {"fieldErrors": {k: list(v) for k, v in self.field_errors.items()}}
        return {"message": self.message}


@dataclass(frozen=True, slots=True)
class ActionResult(Generic[T]):
    """Uniform result of an action invocation.

    `error is None` means the handler ran to completion; `result` then holds
    whatever it returned, which may itself be `None`.
    """

    result: T | None = None
    error: ActionError | None = None

    def __post_init__(self) -> None:
        if self.error is not None and self.result is not None:
            raise ValueError("ActionResult cannot hold both a result and an error")

    @classmethod
    def success(cls, result: T) -> "ActionResult[T]":
        return cls(result=result)

    @classmethod
    def invalid(cls, field_errors: FieldErrors) -> "ActionResult[T]":
        return cls(error=ActionError(field_errors=field_errors))

    @classmethod
    def failure(cls, message: str) -> "ActionResult[T]":
        return cls(error=ActionError(message=message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        if self.error is None:
            return {"result": self.result}
        return {"error": self.error.to_dict()}


@dataclass(frozen=True, slots=True)
class ActionConfig:
    """Definition-time configuration of an action.

    `shape` and `requires_auth` are the two discriminants; together they select
    one of six legal call signatures. Immutable once constructed.
    """

    shape: InputShape
    handler: Handler
    schema: Schema | None = None
    auth: AuthFunction | None = None
    on_error: ErrorObserver | None = None
    name: str = ""
    # Built in __post_init__ from `schema`.
    validator: PayloadValidator | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            shape = InputShape(self.shape)
        except ValueError as e:
            allowed = ",".join(s.value for s in InputShape)
            raise ActionDefinitionError(f"Unknown input shape '{self.shape}' (allowed: {allowed})") from e
        object.__setattr__(self, "shape", shape)

        if not callable(self.handler):
            raise ActionDefinitionError("handler must be callable")
        if shape is InputShape.NONE and self.schema is not None:
            raise ActionDefinitionError("An action without input cannot declare a schema")
        if shape is not InputShape.NONE and self.schema is None:
            raise ActionDefinitionError(f"A schema is required for '{shape.value}' input")
        if self.auth is not None and not callable(self.auth):
            raise ActionDefinitionError("auth must be callable")
        if self.on_error is not None and not callable(self.on_error):
            raise ActionDefinitionError("on_error must be callable")

        if self.schema is not None:
            try:
                validator = PayloadValidator(self.schema)
            except PydanticUserError as e:
                raise ActionDefinitionError(f"Unusable schema: {e}") from e
            object.__setattr__(self, "validator", validator)

        if not self.name:
            name = getattr(self.handler, "__qualname__", None) or type(self.handler).__name__
            object.__setattr__(self, "name", name)

    @property
    def requires_auth(self) -> bool:
        return self.auth is not None


async def _maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


async def _call_handler(handler: Handler, args: tuple[Any, ...]) -> Any:
    return await _maybe_await(handler(*args))


def _pass_through(payload: Any) -> Any:
    return payload


class ValidatedAction(Generic[T]):
    """Invocation handle returned by `define_validated_action`.

    Holds nothing but the immutable config and the normalizer picked for its
    shape, so concurrent invocations are independent of each other.
    """

    __slots__ = ("config", "_normalize")

    def __init__(self, config: ActionConfig) -> None:
        self.config = config
        self._normalize: Callable[[Any], Any] | None
        if config.shape is InputShape.FORM:
            self._normalize = flatten_form
        elif config.shape is InputShape.OBJECT:
            self._normalize = _pass_through
        else:
            self._normalize = None

    def __repr__(self) -> str:
        return f"ValidatedAction(name={self.config.name!r}, shape={self.config.shape.value!r}, auth={self.config.requires_auth})"

    async def __call__(self, payload: Any = None) -> ActionResult[T]:
        """Run the action once.

        Raises only when a navigation signal escapes, when principal resolution
        fails, or when the error observer itself fails. Every other outcome is
        an `ActionResult`.
        """

        fsm = InvocationFSM(self.config.name)

        # Actions without input ignore whatever the caller passed.
        if self._normalize is None:
            return await self._authenticate_and_run(fsm, ())

        fsm.normalize()
        try:
            normalized = self._normalize(payload)
        except FormInputError as e:
            fsm.reject()
            logger.debug("action.invalid name=%s form=%s", self.config.name, e)
            return ActionResult.invalid({ROOT_KEY: [str(e)]})

        fsm.validate_input()
        checked = self.config.validator.validate(normalized)  # type: ignore[union-attr]
        if isinstance(checked, ValidationFailure):
            fsm.reject()
            logger.debug("action.invalid name=%s fields=%s", self.config.name, sorted(checked.field_errors))
            return ActionResult.invalid(checked.field_errors)

        return await self._authenticate_and_run(fsm, (checked.data,))

    async def _authenticate_and_run(self, fsm: InvocationFSM, args: tuple[Any, ...]) -> ActionResult[T]:
        cfg = self.config

        fsm.authenticate()
        if cfg.auth is not None:
            # Not trapped: resolvers redirect unauthenticated callers by raising.
            principal = await _maybe_await(cfg.auth())
            args = (*args, principal)

        fsm.run_handler()
        outcome: Outcome[T] = await try_catch(_call_handler(cfg.handler, args))

        fsm.fold()
        result = await self._fold(outcome)
        fsm.finish()
        return result

    async def _fold(self, outcome: Outcome[T]) -> ActionResult[T]:
        exc = outcome.failure
        if exc is None:
            return ActionResult.success(outcome.value)  # type: ignore[arg-type]

        if is_navigation_signal(exc):
            logger.info("action.navigation name=%s", self.config.name)
            raise exc

        logger.warning("action.failed name=%s error=%s", self.config.name, exc, exc_info=exc)

        # Observer failures are not trapped and reach the caller.
        if self.config.on_error is not None:
            await _maybe_await(self.config.on_error(exc))

        return ActionResult.failure(str(exc))


def define_validated_action(
    *,
    shape: InputShape | str,
    handler: Handler,
    schema: Schema | None = None,
    auth: AuthFunction | None = None,
    on_error: ErrorObserver | None = None,
    name: str = "",
) -> ValidatedAction[Any]:
    """Define an action whose input is validated before the handler runs.

    Example:
        class Signup(BaseModel):
            name: str

        async def signup(data: Signup, user: User) -> str:
            return f"{data.name} - {user.email}"

        action = define_validated_action(shape="form", schema=Signup, handler=signup, auth=current_user)
        res = await action(await request.form())   # ActionResult(result="John - john@example.com")

    The shape decides once how every call's payload is treated:
    - `form`: a form multi-map, flattened to a dict before validation
    - `object`: an already structured value, validated as-is
    - `null`: no input; validation is skipped and the payload ignored

    `auth`, when given, resolves the principal passed to the handler after the
    input. `on_error` is called with any exception the handler raises, except
    navigation signals, which always propagate to the caller.
    """

    config = ActionConfig(
        shape=shape,  # type: ignore[arg-type]
        handler=handler,
        schema=schema,
        auth=auth,
        on_error=on_error,
        name=name,
    )
    return ValidatedAction(config)


def validated_action(
    *,
    shape: InputShape | str,
    schema: Schema | None = None,
    auth: AuthFunction | None = None,
    on_error: ErrorObserver | None = None,
    name: str = "",
) -> Callable[[Handler], ValidatedAction[Any]]:
    """Decorator form of `define_validated_action`."""

    def _decorate(handler: Handler) -> ValidatedAction[Any]:
        return define_validated_action(
            shape=shape,
            handler=handler,
            schema=schema,
            auth=auth,
            on_error=on_error,
            name=name,
        )

    return _decorate
