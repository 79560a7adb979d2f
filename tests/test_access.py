import jwt
import pytest

from ideaboard.auth.access import (
    AccessRule,
    Principal,
    RouteAccess,
    authenticate,
    check_roles,
    decide,
    merge_rules,
)
from ideaboard.auth.policy import HANDLER_RULES, resolve_route_access
from ideaboard.auth.tokens import JWT_ALGORITHM
from ideaboard.errors import Forbidden, Unauthenticated

ALICE = Principal(id="5a0c1e4e-0000-4000-8000-000000000001", username="alice", role="user")
ROOT = Principal(id="5a0c1e4e-0000-4000-8000-000000000002", username="root", role="admin")
ADMIN_ONLY = frozenset({"admin"})


def test_handler_public_overrides_controller():
    access = merge_rules(AccessRule(public=True), AccessRule(public=False))
    assert access.public is True


def test_controller_value_used_when_handler_silent():
    access = merge_rules(AccessRule(), AccessRule(public=True, roles=ADMIN_ONLY))
    assert access == RouteAccess(public=True, required_roles=ADMIN_ONLY)


def test_handler_roles_override_controller():
    access = merge_rules(AccessRule(roles=frozenset()), AccessRule(roles=ADMIN_ONLY))
    assert access.required_roles == frozenset()


def test_nothing_declared_means_protected():
    assert merge_rules(None, None) == RouteAccess(public=False, required_roles=frozenset())


def test_policy_table():
    assert resolve_route_access("ideas.list").public
    assert not resolve_route_access("ideas.create").public
    assert resolve_route_access("auth.login").public
    assert resolve_route_access("users.list").required_roles == ADMIN_ONLY
    assert resolve_route_access("users.my_votes").required_roles == frozenset()


def test_every_route_belongs_to_a_router():
    from ideaboard.auth.policy import CONTROLLER_RULES

    for route_id in HANDLER_RULES:
        assert route_id.split(".", 1)[0] in CONTROLLER_RULES


def test_unknown_route_fails_fast():
    with pytest.raises(KeyError):
        resolve_route_access("ideas.nope")


def test_authenticate_resolves_principal(issuer):
    assert authenticate(issuer.issue(ALICE), issuer) == ALICE


def test_authenticate_missing_token(issuer):
    with pytest.raises(Unauthenticated):
        authenticate(None, issuer)


def test_authenticate_invalid_token(issuer):
    with pytest.raises(Unauthenticated):
        authenticate("garbage", issuer)


@pytest.mark.parametrize("missing", ["sub", "username"])
def test_authenticate_requires_subject_and_username(issuer, missing):
    payload = {"sub": ALICE.id, "username": "alice", "role": "user", "iat": 1, "exp": 4102444800}
    del payload[missing]
    token = jwt.encode(payload, "test-secret", algorithm=JWT_ALGORITHM)
    with pytest.raises(Unauthenticated):
        authenticate(token, issuer)


def test_check_roles_without_requirements_allows_anyone():
    check_roles(None, frozenset())
    check_roles(ALICE, frozenset())


def test_check_roles_requires_principal():
    with pytest.raises(Unauthenticated):
        check_roles(None, ADMIN_ONLY)


def test_check_roles_wrong_role():
    with pytest.raises(Forbidden):
        check_roles(ALICE, ADMIN_ONLY)
    check_roles(ROOT, ADMIN_ONLY)


def test_public_route_skips_authentication(issuer):
    assert decide(RouteAccess(public=True), "garbage", issuer) is None
    assert decide(RouteAccess(public=True), None, issuer) is None


def test_public_route_with_roles_is_unauthenticated(issuer):
    with pytest.raises(Unauthenticated):
        decide(RouteAccess(public=True, required_roles=ADMIN_ONLY), None, issuer)


def test_protected_route(issuer):
    access = RouteAccess(public=False)
    assert decide(access, issuer.issue(ALICE), issuer) == ALICE
    with pytest.raises(Unauthenticated):
        decide(access, None, issuer)


def test_admin_route(issuer):
    access = RouteAccess(public=False, required_roles=ADMIN_ONLY)
    assert decide(access, issuer.issue(ROOT), issuer) == ROOT
    with pytest.raises(Forbidden):
        decide(access, issuer.issue(ALICE), issuer)
