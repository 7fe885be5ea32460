from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from datetime import datetime

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from portal.core.auth import TokenError, decode_access_token
from portal.core.config import get_settings
from portal.domain import User
from portal.domain.services.notifications import CollectingNotifier
from portal.workers.countdown import utc_now

bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),  # noqa: B008
) -> User:
    """Resolve the authenticated user from a bearer token."""
    if credentials is None:
        raise _unauthorized("Missing bearer token")

    try:
        payload = decode_access_token(credentials.credentials)
    except TokenError as exc:
        raise _unauthorized(str(exc)) from exc

    user_id = payload.get("sub")
    roles: Iterable[str] = payload.get("roles", [])

    if not user_id:
        raise _unauthorized("Token missing subject")

    if not roles:
        raise _forbidden("Token missing required roles")

    return User(
        user_id=user_id,
        name=payload.get("name", ""),
        email=payload.get("email", ""),
        roles=list(roles),
        reg_no=payload.get("reg_no"),
    )


def require_roles(required_roles: Sequence[str]) -> Callable[[User], User]:
    """Dependency factory enforcing that the authenticated user has one of the required roles."""
    settings = get_settings()
    allowed = set(settings.allowed_roles)

    invalid_roles = [role for role in required_roles if role not in allowed]
    if invalid_roles:
        joined_roles = ", ".join(invalid_roles)
        raise ValueError(f"Unsupported role(s) requested: {joined_roles}")

    def dependency(user: User = Depends(get_current_user)) -> User:  # noqa: B008
        if not user.has_role(*required_roles):
            raise _forbidden("Insufficient role privileges")
        return user

    return dependency


def get_notifier() -> CollectingNotifier:
    """A fresh notification buffer per request."""
    return CollectingNotifier()


def get_clock() -> Callable[[], datetime]:
    return utc_now


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _forbidden(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=detail)
