"""Resolve which assessor slot the current participant occupies in a session."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import structlog
from portal.domain.models import AssessorAssignment, Participant

logger = structlog.get_logger()


class RoleVariant(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OTHER = "other"
    NONE = "none"


@dataclass(slots=True, frozen=True)
class RoleResolution:
    """Outcome of matching a participant against an assessor list."""

    role: RoleVariant
    index: int

    @property
    def is_primary(self) -> bool:
        return self.role is RoleVariant.PRIMARY

    @property
    def is_secondary(self) -> bool:
        return self.role is RoleVariant.SECONDARY

    @property
    def is_other(self) -> bool:
        return self.role is RoleVariant.OTHER


NO_ROLE = RoleResolution(role=RoleVariant.NONE, index=-1)


def resolve_role(participant: Participant, assignment: AssessorAssignment) -> RoleResolution:
    """Map a participant onto primary/secondary/other by assignment position.

    Matching is an exact, case-sensitive comparison of registration numbers. A
    participant without a registration number never matches.
    """
    if not participant.is_assessor:
        return NO_ROLE

    reg_no = participant.reg_no
    if not reg_no:
        return NO_ROLE

    index = next(
        (position for position, assessor in enumerate(assignment) if assessor.reg_no == reg_no),
        -1,
    )

    if index == -1:
        logger.debug("assessor_not_assigned", reg_no=reg_no, assigned=len(assignment))
        return NO_ROLE
    if index == 0:
        return RoleResolution(role=RoleVariant.PRIMARY, index=0)
    if index == 1:
        return RoleResolution(role=RoleVariant.SECONDARY, index=1)
    return RoleResolution(role=RoleVariant.OTHER, index=index)
