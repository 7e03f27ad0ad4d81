"""
Role based access: a static role -> grants table.

The table is fixed at import time; nothing modifies it at runtime.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from fastapi import Depends, HTTPException, status

from app.auth.dependencies import get_current_user
from app.auth.schemas import CurrentUser, PermissionGrant


CRUD = ("create", "read", "update", "delete")

ROLE_PERMISSIONS: Dict[str, Tuple[Tuple[str, Tuple[str, ...]], ...]] = {
    "super_admin": (
        ("students", CRUD),
        ("attendance", CRUD),
        ("fees", CRUD),
        ("library", CRUD),
        ("seating", CRUD),
        ("reports", CRUD),
        ("settings", CRUD),
        ("users", CRUD),
        ("dashboard", ("read",)),
    ),
    "admin": (
        ("students", CRUD),
        ("attendance", CRUD),
        ("fees", CRUD),
        ("library", CRUD),
        ("seating", CRUD),
        ("reports", CRUD),
        ("dashboard", ("read",)),
    ),
    "accountant": (
        ("fees", ("create", "read", "update")),
        ("reports", ("read",)),
        ("dashboard", ("read",)),
    ),
    "librarian": (
        ("library", CRUD),
        ("students", ("read",)),
        ("reports", ("read",)),
        ("dashboard", ("read",)),
    ),
    "teacher": (
        ("students", ("read",)),
        ("attendance", ("create", "read", "update")),
        ("reports", ("read",)),
        ("dashboard", ("read",)),
    ),
    "student": (
        ("profile", ("read", "update")),
        ("library", ("read",)),
        ("dashboard", ("read",)),
    ),
}


def grants_for_role(role: Optional[str]) -> List[PermissionGrant]:
    return [
        PermissionGrant(resource=resource, actions=list(actions))
        for resource, actions in ROLE_PERMISSIONS.get(role or "", ())
    ]


def has_permission(user: Optional[CurrentUser], resource: str, action: str) -> bool:
    """True iff the user's role has a grant for resource that lists action.

    No user or an unknown role is always False.
    """
    if user is None:
        return False
    for granted_resource, actions in ROLE_PERMISSIONS.get(user.role, ()):
        if granted_resource == resource:
            return action in actions
    return False


def has_role(user: Optional[CurrentUser], roles: Iterable[str]) -> bool:
    if user is None:
        return False
    return user.role in set(roles)


def check_permission(resource: str, action: str):
    """
    Dependency factory to enforce a specific permission.

    Example:
        Depends(check_permission("students", "create"))
    """

    async def _checker(current_user: CurrentUser = Depends(get_current_user)) -> None:
        if not has_permission(current_user, resource, action):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )

    return _checker
