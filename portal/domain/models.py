from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum


class ParticipantCategory(str, Enum):
    """Coarse category of whoever is looking at an assessment session."""

    ASSESSEE = "assessee"
    ASSESSOR = "assessor"
    OTHER = "other"


@dataclass(slots=True)
class User:
    """Represents an authenticated actor within the portal."""

    user_id: str
    name: str = ""
    email: str = ""
    roles: list[str] = field(default_factory=list)
    reg_no: str | None = None

    @property
    def primary_role(self) -> str | None:
        return self.roles[0] if self.roles else None

    def has_role(self, *role_names: str) -> bool:
        """True when any of the user's roles matches any of ``role_names``, ignoring case."""
        wanted = {normalize_role_name(name) for name in role_names}
        return any(normalize_role_name(role) in wanted for role in self.roles)


def normalize_role_name(role_name: str) -> str:
    return role_name.strip().casefold()


@dataclass(slots=True, frozen=True)
class Participant:
    """A user as seen from inside one assessment session."""

    category: ParticipantCategory
    reg_no: str | None = None
    name: str = ""

    @property
    def is_assessor(self) -> bool:
        return self.category is ParticipantCategory.ASSESSOR


@dataclass(slots=True, frozen=True)
class AssignedAssessor:
    """One entry of the assessor list attached to an assessment session."""

    id: str
    name: str
    reg_no: str | None = None


# Position 0 is the primary assessor, 1 the secondary, anything after is additional.
AssessorAssignment = Sequence[AssignedAssessor]


def participant_from_user(user: User | None) -> Participant:
    """Derive the session participant from the authenticated user.

    Every role the user holds counts, matched the way ``User.has_role`` matches.
    Asesor wins over Asesi, and only assessors carry a registration number forward.
    """
    if user is None:
        return Participant(category=ParticipantCategory.OTHER)

    if user.has_role("Asesor"):
        return Participant(
            category=ParticipantCategory.ASSESSOR,
            reg_no=user.reg_no or None,
            name=user.name,
        )
    if user.has_role("Asesi"):
        return Participant(category=ParticipantCategory.ASSESSEE, name=user.name)
    return Participant(category=ParticipantCategory.OTHER, name=user.name)
