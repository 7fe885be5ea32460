from __future__ import annotations

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import jwt
from portal.core.auth import Role, create_access_token
from portal.core.config import get_settings
from portal.domain import AssignedAssessor

FIXED_NOW = datetime(2025, 1, 10, 1, 0, 0, tzinfo=UTC)


def auth_headers(
    user_id: str = "asesi-1",
    role: Role = Role.ASESI,
    *,
    extra_roles: Sequence[str] = (),
    reg_no: str | None = None,
    name: str | None = None,
) -> dict[str, str]:
    token = create_access_token(
        user_id,
        roles=[role.value, *extra_roles],
        email=f"{user_id}@example.com",
        name=name,
        reg_no=reg_no,
    )
    return bearer(token)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def build_assignment(reg_nos: Sequence[str | None]) -> list[AssignedAssessor]:
    """Assessor list in the given order, one entry per registration number."""
    return [
        AssignedAssessor(id=str(position + 1), name=f"Asesor {position + 1}", reg_no=reg_no)
        for position, reg_no in enumerate(reg_nos)
    ]


def assessors_payload(reg_nos: Sequence[str | None]) -> list[dict]:
    return [
        {"id": assessor.id, "name": assessor.name, "reg_no": assessor.reg_no}
        for assessor in build_assignment(reg_nos)
    ]


def raw_token(roles: Sequence[str], *, user_id: str = "user-9", reg_no: str | None = None) -> str:
    """Token signed like the backend's, with the role names exactly as given."""
    settings = get_settings()
    claims = {
        "sub": user_id,
        "roles": list(roles),
        "exp": int((datetime.now(UTC) + timedelta(minutes=5)).timestamp()),
    }
    if reg_no:
        claims["reg_no"] = reg_no
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
