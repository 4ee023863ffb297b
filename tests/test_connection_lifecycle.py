"""Unit tests for the connection status transition table."""

import pytest

from caselink.errors.exceptions import InvalidTransitionError, ValidationError
from caselink.models.enums import ConnectionAction as A
from caselink.models.enums import ConnectionStatus as S
from caselink.services import connection_lifecycle as lc


@pytest.mark.parametrize(
    "current,action,expected",
    [
        (S.PENDING, A.ACCEPT, S.ACTIVE),
        (S.PENDING, A.DECLINE, S.DECLINED),
        (S.ACTIVE, A.PAUSE, S.PAUSED),
        (S.PAUSED, A.RESUME, S.ACTIVE),
        (S.ACTIVE, A.COMPLETE, S.COMPLETE),
        (S.PAUSED, A.COMPLETE, S.COMPLETE),
    ],
)
def test_allowed_transitions(current, action, expected):
    assert lc.next_status(current, action) == expected


@pytest.mark.parametrize(
    "current,action",
    [
        (S.PENDING, A.PAUSE),
        (S.PENDING, A.COMPLETE),
        (S.ACTIVE, A.ACCEPT),
        (S.ACTIVE, A.RESUME),
        (S.PAUSED, A.PAUSE),
        (S.COMPLETE, A.COMPLETE),
        (S.DECLINED, A.ACCEPT),
    ],
)
def test_disallowed_transitions_raise(current, action):
    with pytest.raises(InvalidTransitionError) as exc_info:
        lc.next_status(current, action)
    assert exc_info.value.status_code == 409
    assert exc_info.value.code == "INVALID_TRANSITION"
    assert exc_info.value.details == {"status": current, "action": action}


def test_create_is_not_a_transition():
    with pytest.raises(InvalidTransitionError):
        lc.next_status(S.PENDING, A.CREATE)


def test_terminal_statuses_allow_nothing():
    for status in S:
        actions = lc.allowed_actions(status)
        assert (actions == []) == lc.is_terminal(status)


def test_allowed_actions_in_table_order():
    assert lc.allowed_actions("pending") == [A.ACCEPT, A.DECLINE]
    assert lc.allowed_actions("active") == [A.PAUSE, A.COMPLETE]
    assert lc.allowed_actions("paused") == [A.RESUME, A.COMPLETE]


def test_action_for_target_maps_status_patch():
    assert lc.action_for_target("active", "paused") == A.PAUSE
    assert lc.action_for_target("paused", "active") == A.RESUME
    assert lc.action_for_target("paused", "complete") == A.COMPLETE
    assert lc.action_for_target("active", "complete") == A.COMPLETE


def test_action_for_target_rejects_leaving_pending():
    with pytest.raises(InvalidTransitionError):
        lc.action_for_target("pending", "paused")
    # Accepting goes through the helper-only endpoint
    with pytest.raises(InvalidTransitionError):
        lc.action_for_target("pending", "active")


def test_action_for_target_rejects_terminal_and_unknown_targets():
    with pytest.raises(InvalidTransitionError):
        lc.action_for_target("complete", "complete")
    with pytest.raises(InvalidTransitionError):
        lc.action_for_target("declined", "active")
    with pytest.raises(ValidationError):
        lc.action_for_target("active", "declined")
    with pytest.raises(ValidationError):
        lc.action_for_target("active", "archived")
