"""Connection lifecycle: the status transition table.

    pending  -> active (accept) | declined (decline)
    active   -> paused (pause)  | complete (complete)
    paused   -> active (resume) | complete (complete)
    complete, declined: terminal

Pure functions over status values; who may invoke an action is decided by
``caselink.services.policy``.
"""

from caselink.errors.exceptions import InvalidTransitionError, ValidationError
from caselink.models.enums import ConnectionAction, ConnectionStatus

S = ConnectionStatus
A = ConnectionAction

INITIAL_STATUS = S.PENDING

# action -> (allowed source statuses, target status)
TRANSITIONS: dict[ConnectionAction, tuple[frozenset[ConnectionStatus], ConnectionStatus]] = {
    A.ACCEPT: (frozenset({S.PENDING}), S.ACTIVE),
    A.DECLINE: (frozenset({S.PENDING}), S.DECLINED),
    A.PAUSE: (frozenset({S.ACTIVE}), S.PAUSED),
    A.RESUME: (frozenset({S.PAUSED}), S.ACTIVE),
    A.COMPLETE: (frozenset({S.ACTIVE, S.PAUSED}), S.COMPLETE),
}

TERMINAL_STATUSES = frozenset({S.COMPLETE, S.DECLINED})

# Targets reachable through PATCH /connections/{id}/status
STATUS_TARGETS = frozenset({S.ACTIVE, S.PAUSED, S.COMPLETE})


def next_status(current: str, action: str) -> ConnectionStatus:
    """Return the status ``action`` moves a connection in ``current`` to.

    Raises:
        InvalidTransitionError: ``action`` is not allowed from ``current``.
    """
    current = ConnectionStatus(current)
    action = ConnectionAction(action)
    if action not in TRANSITIONS:
        raise InvalidTransitionError(current, action)
    sources, target = TRANSITIONS[action]
    if current not in sources:
        raise InvalidTransitionError(current, action)
    return target


def allowed_actions(current: str) -> list[ConnectionAction]:
    """Actions valid from ``current``, in table order."""
    current = ConnectionStatus(current)
    return [action for action, (sources, _) in TRANSITIONS.items() if current in sources]


def is_terminal(status: str) -> bool:
    return ConnectionStatus(status) in TERMINAL_STATUSES


def action_for_target(current: str, target: str) -> ConnectionAction:
    """Map a requested target status to the action that reaches it.

    ``active`` from ``paused`` is a resume. Accepting a pending connection is
    a separate helper-only call, so ``active`` from ``pending`` is rejected
    here along with every other move the table does not allow.
    """
    try:
        target = ConnectionStatus(target)
    except ValueError as exc:
        raise ValidationError(f"Unknown status '{target}'") from exc
    if target not in STATUS_TARGETS:
        raise ValidationError(
            f"Status must be one of: {', '.join(sorted(STATUS_TARGETS))}"
        )

    current = ConnectionStatus(current)
    for action in allowed_actions(current):
        if action in (A.ACCEPT, A.DECLINE):
            continue
        if TRANSITIONS[action][1] == target:
            return action

    # Name the action the caller was attempting in the error
    attempted = {S.ACTIVE: A.RESUME, S.PAUSED: A.PAUSE, S.COMPLETE: A.COMPLETE}[target]
    raise InvalidTransitionError(current, attempted)
