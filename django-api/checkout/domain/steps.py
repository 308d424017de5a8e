"""Wizard step order and forward-navigation gating."""

from checkout.domain.errors import InvalidStepError
from checkout.domain.models import CheckoutState
from checkout.domain.validation import campers_step_errors
from checkout.domain.value_objects import CheckoutStep

STEP_ORDER = (
    CheckoutStep.CAMP,
    CheckoutStep.CAMPERS,
    CheckoutStep.SQUAD,
    CheckoutStep.ADDONS,
    CheckoutStep.WAIVERS,
    CheckoutStep.ACCOUNT,
    CheckoutStep.PAYMENT,
    CheckoutStep.CONFIRMATION,
)

WAITLIST_STEP_ORDER = (
    CheckoutStep.CAMP,
    CheckoutStep.CAMPERS,
    CheckoutStep.SQUAD,
    CheckoutStep.WAIVERS,
    CheckoutStep.ACCOUNT,
    CheckoutStep.WAITLIST_CONFIRM,
)

TERMINAL_STEPS = frozenset({CheckoutStep.CONFIRMATION, CheckoutStep.WAITLIST_CONFIRM})

# Steps with nothing to check here. Payment is validated by the payment processor.
_ALWAYS_OPEN = frozenset({CheckoutStep.SQUAD, CheckoutStep.ADDONS, CheckoutStep.PAYMENT})


def parse_step(value: str) -> CheckoutStep:
    try:
        return CheckoutStep(value)
    except ValueError:
        raise InvalidStepError(value) from None


def active_order(is_waitlist_mode: bool) -> tuple[CheckoutStep, ...]:
    return WAITLIST_STEP_ORDER if is_waitlist_mode else STEP_ORDER


def is_terminal(step: CheckoutStep) -> bool:
    return step in TERMINAL_STEPS


def next_step(state: CheckoutState) -> CheckoutStep:
    """The step after the current one, or the current step at the end of the order."""
    order = active_order(state.is_waitlist_mode)
    if state.step not in order:
        return order[0]
    index = order.index(state.step)
    return order[index + 1] if index < len(order) - 1 else state.step


def prev_step(state: CheckoutState) -> CheckoutStep:
    """The step before the current one, or the current step at the start of the order."""
    order = active_order(state.is_waitlist_mode)
    if state.step not in order:
        return state.step
    index = order.index(state.step)
    return order[index - 1] if index > 0 else state.step


def can_proceed(state: CheckoutState) -> bool:
    """Whether the current step's requirements are met."""
    if state.step is CheckoutStep.CAMP:
        camp = state.camp_session
        return camp is not None and (state.is_waitlist_mode or camp.spots_remaining.has_room)
    if state.step is CheckoutStep.CAMPERS:
        return not campers_step_errors(state)
    return state.step in _ALWAYS_OPEN
