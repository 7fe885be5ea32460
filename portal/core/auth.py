from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime, timedelta
from enum import Enum

import jwt
from portal.core.config import get_settings
from portal.domain.models import normalize_role_name


class TokenError(Exception):
    """Raised when a token cannot be decoded or validated."""


class Role(str, Enum):
    ADMIN_LSP = "Admin LSP"
    DIREKTUR_LSP = "Direktur LSP"
    MANAJER_SERTIFIKASI = "Manajer Sertifikasi"
    ADMIN_TUK = "Admin TUK"
    ASESOR = "Asesor"
    ASESI = "Asesi"
    KOMTEK = "Komtek"

    @classmethod
    def lookup(cls, value: str) -> Role | None:
        key = normalize_role_name(value)
        return next((role for role in cls if normalize_role_name(role.value) == key), None)


def canonical_roles(roles: Iterable[str]) -> list[str]:
    """Spell every role the way the portal does, rejecting names it does not know.

    The upstream backend is not consistent about case (``asesor`` vs ``Asesor``).
    """
    canonical: list[str] = []
    for role_name in roles:
        role = Role.lookup(role_name)
        if role is None:
            raise TokenError(f"Unsupported role: {role_name}")
        canonical.append(role.value)
    return canonical


def create_access_token(
    subject: str,
    *,
    roles: Sequence[str],
    email: str | None = None,
    name: str | None = None,
    reg_no: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Generate a signed JWT access token.

    ``reg_no`` is the assessor registration number; it is what assessment sessions
    use to match an assessor against their assignment list.
    """
    settings = get_settings()
    issued_at = datetime.now(UTC)
    expires_at = issued_at + (expires_delta or timedelta(seconds=settings.access_token_ttl_seconds))
    claims = {
        "sub": subject,
        "roles": canonical_roles(roles),
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
        "iss": settings.app_name,
    }
    optional = {"email": email, "name": name, "reg_no": reg_no}
    claims.update({key: value for key, value in optional.items() if value})

    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Decode and validate a JWT access token; roles come back in canonical spelling."""
    settings = get_settings()

    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "roles", "exp"]},
        )
    except jwt.PyJWTError as exc:  # pragma: no cover - third-party raises numerous subclasses
        raise TokenError("Invalid token") from exc

    claims["roles"] = canonical_roles(claims.get("roles", []))
    return claims
