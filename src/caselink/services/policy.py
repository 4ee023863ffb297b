"""Centralized role policy: (action x role) -> scope.

Routes call ``authorize`` once per request with the target org and, for
connection-level actions, the connection itself.
"""

from dataclasses import dataclass
from enum import StrEnum

from caselink.errors.exceptions import AuthorizationError
from caselink.models.enums import UserRole


class Action(StrEnum):
    ORGS_MANAGE = "orgs:manage"
    ORG_VIEW = "org:view"
    ORG_UPDATE = "org:update"
    CLIENTS_MANAGE = "clients:manage"
    USERS_MANAGE = "users:manage"
    MEMBERSHIP_MANAGE = "users:membership"
    CONNECTIONS_MANAGE = "connections:manage"
    CONNECTIONS_MINE = "connections:mine"
    CONNECTION_VIEW = "connection:view"
    CONNECTION_RESPOND = "connection:respond"
    CONNECTION_STATUS = "connection:status"
    CONNECTION_LOG = "connection:log"
    RATINGS_MANAGE = "ratings:manage"
    PROFILE_MANAGE = "profile:manage"


class Scope(StrEnum):
    ANY = "any"
    OWN_ORG = "own_org"
    OWN_CONNECTION = "own_connection"
    SELF = "self"


@dataclass(frozen=True)
class ActionPolicy:
    """Scope granted to each role; roles not listed are denied."""

    grants: dict[UserRole, Scope]
    requirement: str


R = UserRole

_STAFF = {R.SUPERADMIN: Scope.ANY, R.ORGADMIN: Scope.OWN_ORG}
_STAFF_OR_HELPER = {**_STAFF, R.SERVICEPROVIDER: Scope.OWN_CONNECTION}
_HELPER_ONLY = {R.SERVICEPROVIDER: Scope.OWN_CONNECTION}

POLICIES: dict[Action, ActionPolicy] = {
    Action.ORGS_MANAGE: ActionPolicy({R.SUPERADMIN: Scope.ANY}, "superadmin"),
    Action.ORG_VIEW: ActionPolicy(_STAFF, "staff of this org"),
    Action.ORG_UPDATE: ActionPolicy(_STAFF, "staff of this org"),
    Action.CLIENTS_MANAGE: ActionPolicy(_STAFF, "staff of this org"),
    Action.USERS_MANAGE: ActionPolicy(_STAFF, "staff of this org"),
    Action.MEMBERSHIP_MANAGE: ActionPolicy({R.SUPERADMIN: Scope.ANY}, "superadmin"),
    Action.CONNECTIONS_MANAGE: ActionPolicy(_STAFF, "staff of this org"),
    Action.CONNECTIONS_MINE: ActionPolicy({R.SERVICEPROVIDER: Scope.SELF}, "serviceprovider"),
    Action.CONNECTION_VIEW: ActionPolicy(_STAFF_OR_HELPER, "staff of this org or the connection's helper"),
    Action.CONNECTION_RESPOND: ActionPolicy(_HELPER_ONLY, "the connection's helper"),
    Action.CONNECTION_STATUS: ActionPolicy(_STAFF_OR_HELPER, "staff of this org or the connection's helper"),
    Action.CONNECTION_LOG: ActionPolicy(_HELPER_ONLY, "the connection's helper"),
    Action.RATINGS_MANAGE: ActionPolicy(_STAFF, "staff of this org"),
    Action.PROFILE_MANAGE: ActionPolicy(
        {R.SUPERADMIN: Scope.SELF, R.ORGADMIN: Scope.SELF, R.SERVICEPROVIDER: Scope.SELF},
        "an authenticated user",
    ),
}


def get_policy(action: Action) -> ActionPolicy:
    """Fetch an action policy or raise KeyError."""
    return POLICIES[action]


def is_allowed(user, action: Action, *, org_id: str | None = None, connection=None) -> bool:
    """Evaluate the policy table for ``user`` (anything with ``role``, ``org_id``, ``user_id``)."""
    try:
        role = UserRole(user.role)
    except ValueError:
        return False
    scope = get_policy(action).grants.get(role)
    if scope is None:
        return False

    if scope in (Scope.ANY, Scope.SELF):
        return True
    if scope == Scope.OWN_ORG:
        target_org = connection.org_id if connection is not None else org_id
        return target_org is not None and user.org_id == target_org
    if scope == Scope.OWN_CONNECTION:
        return connection is not None and connection.helper_id == user.user_id
    return False


def authorize(user, action: Action, *, org_id: str | None = None, connection=None) -> None:
    """Raise AuthorizationError unless the policy table allows ``action``."""
    if not is_allowed(user, action, org_id=org_id, connection=connection):
        raise AuthorizationError(get_policy(action).requirement)


def is_staff_of(user, org_id: str) -> bool:
    return is_allowed(user, Action.ORG_VIEW, org_id=org_id)
