"""Staff roles and the content edit/delete policy."""

from enum import Enum, IntEnum


class Role(IntEnum):
    """
    Closed set of staff roles, stored as integers on the users table.

    There is no regular-user role: every account is staff.
    """

    ADMIN = 1
    SUPERADMIN = 2


class ContentEditPolicy(str, Enum):
    """Who may edit or delete a blog post, event or news article."""

    ANY_ADMIN_OR_SUPERADMIN = "any_admin_or_superadmin"
    OWNER_OR_SUPERADMIN = "owner_or_superadmin"


def parse_role(value: object) -> Role | None:
    """Return the Role for a stored/claimed value, or None if it is not a known role."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    try:
        return Role(value)
    except ValueError:
        return None


def can_modify_content(
    policy: ContentEditPolicy,
    role: Role,
    user_id: int,
    owner_id: int | None,
) -> bool:
    """True if a caller with role/user_id may edit or delete a record owned by owner_id."""
    if role is Role.SUPERADMIN:
        return True
    if role is not Role.ADMIN:
        return False
    if policy is ContentEditPolicy.ANY_ADMIN_OR_SUPERADMIN:
        return True
    if policy is ContentEditPolicy.OWNER_OR_SUPERADMIN:
        return owner_id is not None and owner_id == user_id
    raise ValueError(f"Unknown content edit policy: {policy!r}")
