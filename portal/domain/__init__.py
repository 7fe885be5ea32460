from portal.domain.models import (
    AssessorAssignment,
    AssignedAssessor,
    Participant,
    ParticipantCategory,
    User,
    participant_from_user,
)

__all__ = [
    "AssessorAssignment",
    "AssignedAssessor",
    "Participant",
    "ParticipantCategory",
    "User",
    "participant_from_user",
]
