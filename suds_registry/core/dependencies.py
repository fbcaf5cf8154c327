import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request, status
from starlette.requests import HTTPConnection

from suds_registry.core.capabilities import EditScope, Role, can_edit_collection
from suds_registry.store.base import DocumentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: Role


async def get_current_user(
    request: Request,
    x_user_id: Annotated[str | None, Header()] = None,
    x_user_role: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Dependency to get the caller identity forwarded by the auth proxy."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
    )

    if not x_user_id or not x_user_id.strip():
        logger.warning("Unauthenticated request: reason=missing_user_id")
        raise credentials_exception

    try:
        role = Role(x_user_role)
    except ValueError as e:
        logger.warning(f"Unauthenticated request: reason=unknown_role role={x_user_role}")
        raise credentials_exception from e

    # Store identity in request state for middleware logging
    request.state.user_id = x_user_id.strip()
    request.state.user_role = role.value

    return CurrentUser(user_id=x_user_id.strip(), role=role)


def get_store(connection: HTTPConnection) -> DocumentStore:
    """Dependency returning the document store created at startup."""
    return connection.app.state.store


def require_capability(scope: EditScope) -> Callable[..., Awaitable[CurrentUser]]:
    """Build a dependency that rejects callers whose role cannot edit `scope`."""

    async def dependency(
        user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        if not can_edit_collection(user.role, scope):
            logger.warning(
                f"Edit denied: user_id={user.user_id} role={user.role.value} scope={scope.value}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Role {user.role.value!r} cannot edit {scope.value}",
            )
        return user

    return dependency
