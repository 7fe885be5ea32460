"""Domain services."""

from portal.domain.services.entry_gate import (
    EntryGate,
    GatePhase,
    GateReading,
    Locked,
    StageFlags,
    TemporalState,
    Unlocked,
    read_gate,
)
from portal.domain.services.navigation import resolve_entry_target
from portal.domain.services.notifications import CollectingNotifier, LogNotifier, Notifier
from portal.domain.services.roles import RoleResolution, RoleVariant, resolve_role
from portal.domain.services.steps import (
    StepDescriptor,
    StepSequence,
    get_pre_assessment_steps,
    get_steps,
    step_number_for,
)

__all__ = [
    "CollectingNotifier",
    "EntryGate",
    "GatePhase",
    "GateReading",
    "Locked",
    "LogNotifier",
    "Notifier",
    "RoleResolution",
    "RoleVariant",
    "StageFlags",
    "StepDescriptor",
    "StepSequence",
    "TemporalState",
    "Unlocked",
    "get_pre_assessment_steps",
    "get_steps",
    "read_gate",
    "resolve_entry_target",
    "resolve_role",
    "step_number_for",
]
