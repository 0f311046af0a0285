"""
Tests for the authorization policy.
"""

import pytest

from blogapi.core.exceptions import Forbidden
from blogapi.core.permissions import Action, Decision, Ownership, authorize, decide
from blogapi.models.user import UserRole
from blogapi.schemas.token import TokenClaims

ADMIN = TokenClaims(sub="admin-id", email="admin@example.com", role=UserRole.ADMIN)
ALICE = TokenClaims(sub="alice-id", email="alice@example.com", role=UserRole.USER)
BOB = TokenClaims(sub="bob-id", email="bob@example.com", role=UserRole.USER)


@pytest.mark.parametrize("action", [Action.CREATE_POST, Action.UPDATE_POST, Action.DELETE_POST, Action.ADMIN])
def test_admin_only_actions(action: Action) -> None:
    ownership = Ownership(post_author_id=ALICE.sub)
    assert decide(ADMIN, action, ownership) is Decision.ALLOW
    assert decide(BOB, action, ownership) is Decision.DENY


@pytest.mark.parametrize("action", [Action.UPDATE_POST, Action.DELETE_POST])
def test_post_author_without_admin_role_is_denied(action: Action) -> None:
    assert decide(ALICE, action, Ownership(post_author_id=ALICE.sub)) is Decision.DENY


def test_any_authenticated_user_may_comment() -> None:
    assert decide(ALICE, Action.CREATE_COMMENT) is Decision.ALLOW
    assert decide(ADMIN, Action.CREATE_COMMENT) is Decision.ALLOW


@pytest.mark.parametrize(
    "claims, expected",
    [
        (ALICE, Decision.ALLOW),  # comment author
        (BOB, Decision.ALLOW),  # post author
        (ADMIN, Decision.ALLOW),
        (TokenClaims(sub="carol-id", email="carol@example.com", role=UserRole.USER), Decision.DENY),
    ],
)
def test_delete_comment(claims: TokenClaims, expected: Decision) -> None:
    ownership = Ownership(post_author_id=BOB.sub, comment_author_id=ALICE.sub)
    assert decide(claims, Action.DELETE_COMMENT, ownership) is expected


def test_delete_comment_without_ownership_facts_needs_admin() -> None:
    assert decide(ALICE, Action.DELETE_COMMENT) is Decision.DENY
    assert decide(ADMIN, Action.DELETE_COMMENT) is Decision.ALLOW


def test_read_is_public() -> None:
    assert decide(None, Action.READ) is Decision.ALLOW
    assert decide(ALICE, Action.READ) is Decision.ALLOW


@pytest.mark.parametrize("action", [a for a in Action if a is not Action.READ])
def test_anonymous_is_denied(action: Action) -> None:
    assert decide(None, action) is Decision.DENY


def test_authorize_raises_forbidden() -> None:
    authorize(ADMIN, Action.CREATE_POST)
    with pytest.raises(Forbidden):
        authorize(ALICE, Action.CREATE_POST)
