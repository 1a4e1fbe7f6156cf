from __future__ import annotations

import logging

from statemachine import State, StateMachine

logger = logging.getLogger(__name__)


class InvocationFSM(StateMachine):
    """Lifecycle of a single action invocation.

    - with input: Start -> Normalizing -> Validating -> Authenticating -> Invoking -> Folding -> Return
    - rejected input: Normalizing or Validating -> FieldErrorReturn
    - without input: Start -> Authenticating -> ...

    The dispatcher already calls its steps in this order; the machine is there
    to guard that order, so a step run out of sequence fails loudly with
    `TransitionNotAllowed` instead of producing a result. It also gives every
    step a DEBUG log line. A fresh machine is created per invocation and never
    moves backwards. Authenticating is entered even when no principal resolver
    is configured.
    """

    started = State("Start", initial=True)
    normalizing = State("Normalizing")
    validating = State("Validating")
    field_error_return = State("FieldErrorReturn", final=True)
    authenticating = State("Authenticating")
    invoking = State("Invoking")
    folding = State("Folding")
    returned = State("Return", final=True)

    normalize = started.to(normalizing)
    validate_input = normalizing.to(validating)
    reject = validating.to(field_error_return) | normalizing.to(field_error_return)
    authenticate = validating.to(authenticating) | started.to(authenticating)
    run_handler = authenticating.to(invoking)
    fold = invoking.to(folding)
    finish = folding.to(returned)

    def __init__(self, action_name: str = "") -> None:
        self.action_name = action_name
        super().__init__()

    @property
    def is_terminal(self) -> bool:
        return bool(self.current_state.final)

    def after_transition(self, event: str, source: State, target: State) -> None:
        logger.debug("action.transition name=%s event=%s %s->%s", self.action_name, event, source.id, target.id)
