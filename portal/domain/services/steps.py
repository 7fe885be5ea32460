"""
Workflow step sequences for the certification flow.

Two stages share this module:
- pre-assessment: identical ten-step flow for every participant
- assessment: differs by who is looking (assessee, primary or secondary assessor)

Every ``path`` is the distinctive route segment of its step. Locations are matched
by substring, so within one sequence no path may be contained in another.
"""

from __future__ import annotations

from dataclasses import dataclass

from portal.domain.services.roles import RoleVariant


@dataclass(slots=True, frozen=True)
class StepDescriptor:
    number: int
    label: str
    path: str


StepSequence = tuple[StepDescriptor, ...]

PRE_ASSESSMENT_BASE = "/asesi/praasesmen"
ASSESSMENT_BASE = "/asesi/asesmen"
COMPLETION_PATH = "selesai"


PRE_ASSESSMENT_STEPS: StepSequence = (
    StepDescriptor(1, "Konfirmasi", "konfirmasi"),
    StepDescriptor(2, "APL 01", "APL01"),
    StepDescriptor(3, "APL 02", "APL02"),
    StepDescriptor(4, "MAPA 01", "MAPA01"),
    StepDescriptor(5, "MAPA 02", "MAPA02"),
    StepDescriptor(6, "AK.07", "AK07"),
    StepDescriptor(7, "AK.04", "AK04"),
    StepDescriptor(8, "K3", "K3"),
    StepDescriptor(9, "AK.01", "AK01"),
    StepDescriptor(10, "Selesai", COMPLETION_PATH),
)

ASSESSEE_STEPS: StepSequence = (
    StepDescriptor(1, "IA.04.A", "ia04a"),
    StepDescriptor(2, "Upload Tugas", "upload-tugas"),
    StepDescriptor(3, "IA.04.B", "ia04b"),
    StepDescriptor(4, "IA.05", "ia05"),
    StepDescriptor(5, "Selesai", COMPLETION_PATH),
)

PRIMARY_ASSESSOR_STEPS: StepSequence = (
    StepDescriptor(1, "IA.04.A", "ia04a"),
    StepDescriptor(2, "Review Tugas", "upload-tugas"),
    StepDescriptor(3, "IA.04.B", "ia04b"),
    StepDescriptor(4, "IA.05", "ia05"),
    StepDescriptor(5, "AK.02", "ak02"),
    StepDescriptor(6, "AK.03", "ak03"),
    StepDescriptor(7, "AK.06", "ak06"),
    StepDescriptor(8, "Selesai", COMPLETION_PATH),
)

# Same as the primary flow without the AK.03 feedback form.
SECONDARY_ASSESSOR_STEPS: StepSequence = (
    StepDescriptor(1, "IA.04.A", "ia04a"),
    StepDescriptor(2, "Review Tugas", "upload-tugas"),
    StepDescriptor(3, "IA.04.B", "ia04b"),
    StepDescriptor(4, "IA.05", "ia05"),
    StepDescriptor(5, "AK.02", "ak02"),
    StepDescriptor(6, "AK.06", "ak06"),
    StepDescriptor(7, "Selesai", COMPLETION_PATH),
)


def get_steps(is_assessor: bool, role: RoleVariant) -> StepSequence:
    """Return the assessment-stage sequence for a participant.

    Assessors in the third slot or later follow the secondary flow. An assessor
    that matched no slot at all falls back to it too.
    """
    if not is_assessor:
        return ASSESSEE_STEPS
    if role is RoleVariant.PRIMARY:
        return PRIMARY_ASSESSOR_STEPS
    return SECONDARY_ASSESSOR_STEPS


def get_pre_assessment_steps() -> StepSequence:
    return PRE_ASSESSMENT_STEPS


def step_number_for(sequence: StepSequence, current_location: str) -> int:
    """Return the number of the first step whose path occurs in the location, else 1."""
    for step in sequence:
        if step.path in current_location:
            return step.number
    return 1


def current_step(sequence: StepSequence, current_location: str) -> StepDescriptor:
    number = step_number_for(sequence, current_location)
    return sequence[number - 1]


def next_step(sequence: StepSequence, current_location: str) -> StepDescriptor | None:
    number = step_number_for(sequence, current_location)
    if number >= len(sequence):
        return None
    return sequence[number]


def previous_step(sequence: StepSequence, current_location: str) -> StepDescriptor | None:
    number = step_number_for(sequence, current_location)
    if number <= 1:
        return None
    return sequence[number - 2]


def assessment_href(step: StepDescriptor, session_id: str) -> str:
    return f"{ASSESSMENT_BASE}/{session_id}/{step.path}"


def pre_assessment_href(step: StepDescriptor) -> str:
    # The confirmation step lives on the bare stage entry route.
    if step.number == 1:
        return PRE_ASSESSMENT_BASE
    return f"{PRE_ASSESSMENT_BASE}/{step.path}"


def completion_href(session_id: str) -> str:
    """Where every assessment flow ends, whoever walked it."""
    return f"{ASSESSMENT_BASE}/{session_id}/{COMPLETION_PATH}"


def find_ambiguous_paths(sequence: StepSequence) -> list[tuple[str, str]]:
    """List ``(inner, outer)`` pairs where one step path is contained in another."""
    pairs: list[tuple[str, str]] = []
    for inner in sequence:
        for outer in sequence:
            if inner is not outer and inner.path in outer.path:
                pairs.append((inner.path, outer.path))
    return pairs
