"""
Authorization policy.

``decide`` is a pure function over the requester's token claims, the action
being attempted and the ownership facts of the targeted resource. Routes
call ``authorize`` only after the resource has been loaded, so a missing
resource is reported as 404 before any 403.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from blogapi.core.exceptions import Forbidden
from blogapi.core.logging import get_logger
from blogapi.models.user import UserRole
from blogapi.schemas.token import TokenClaims

logger = get_logger(__name__)


class Action(str, Enum):
    """Actions subject to authorization."""

    READ = "read"
    CREATE_POST = "create_post"
    UPDATE_POST = "update_post"
    DELETE_POST = "delete_post"
    CREATE_COMMENT = "create_comment"
    DELETE_COMMENT = "delete_comment"
    ADMIN = "admin"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


@dataclass(frozen=True)
class Ownership:
    """Author ids of the resource an action targets."""

    post_author_id: Optional[str] = None
    comment_author_id: Optional[str] = None


ADMIN_ONLY_ACTIONS = frozenset(
    {Action.CREATE_POST, Action.UPDATE_POST, Action.DELETE_POST, Action.ADMIN}
)


def _is_admin(claims: TokenClaims) -> bool:
    if claims.role is UserRole.ADMIN:
        return True
    if claims.role is UserRole.USER:
        return False
    raise ValueError(f"Unhandled role: {claims.role!r}")


def decide(
    claims: Optional[TokenClaims],
    action: Action,
    ownership: Optional[Ownership] = None,
) -> Decision:
    """
    Decide whether ``claims`` may perform ``action``.

    Post authorship never grants update or delete rights on the post;
    only the admin role does.
    """
    if action is Action.READ:
        return Decision.ALLOW
    if claims is None:
        return Decision.DENY

    if action in ADMIN_ONLY_ACTIONS:
        return Decision.ALLOW if _is_admin(claims) else Decision.DENY

    if action is Action.CREATE_COMMENT:
        return Decision.ALLOW

    if action is Action.DELETE_COMMENT:
        ownership = ownership or Ownership()
        if claims.sub == ownership.comment_author_id:
            return Decision.ALLOW
        if claims.sub == ownership.post_author_id:
            return Decision.ALLOW
        return Decision.ALLOW if _is_admin(claims) else Decision.DENY

    raise ValueError(f"Unhandled action: {action!r}")


def authorize(
    claims: Optional[TokenClaims],
    action: Action,
    ownership: Optional[Ownership] = None,
) -> None:
    """
    Raise ``Forbidden`` unless ``decide`` allows the action.

    Raises:
        Forbidden: If the policy denies the action
    """
    if decide(claims, action, ownership) is Decision.DENY:
        requester = claims.sub if claims else "anonymous"
        logger.warning(f"Denied {action.value} for user {requester}")
        raise Forbidden("Not authorized" if action is Action.DELETE_COMMENT else "Forbidden")
