"""
Temporal access gate for entering a scheduled exam.

The gate reads wall-clock time against the scheduled start and moves through four
phases:

- waiting: more than 15 minutes before the start
- urgent: within the 15 minutes before the start
- active: started, at most 60 minutes ago
- expired: started more than 60 minutes ago

Entry is enabled in ``urgent`` and ``active``. On top of that the dashboard keeps a
one-way latch: the first enabled reading freezes the button label, and nothing
afterwards locks it again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from portal.core.config import get_settings

logger = structlog.get_logger()

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

ENTRY_WINDOW_SECONDS = 900
LATE_GRACE_SECONDS = 3600
SLOW_TICK_THRESHOLD_MS = MS_PER_HOUR
SLOW_TICK_SECONDS = 60
FAST_TICK_SECONDS = 1

LOCKED_LABEL = "Lihat Persiapan"
PRE_ASSESSMENT_LABEL = "Masuk Pra-Asesmen"
ASSESSMENT_LABEL = "Masuk Asesmen"
EXAM_LABEL = "Masuk ke Ujian"
UNLOCK_LABELS = frozenset({PRE_ASSESSMENT_LABEL, ASSESSMENT_LABEL, EXAM_LABEL})

LATE_HEADING = "Telat"
UPCOMING_HEADING = "Ujian Akan Dimulai Dalam"


class GatePhase(str, Enum):
    WAITING = "waiting"
    URGENT = "urgent"
    ACTIVE = "active"
    EXPIRED = "expired"

    @property
    def allows_entry(self) -> bool:
        return self in (GatePhase.URGENT, GatePhase.ACTIVE)


@dataclass(slots=True, frozen=True)
class TemporalState:
    """Countdown to the scheduled start, or time elapsed past it when ``is_late``.

    Lateness is only tracked in minutes and seconds; ``days`` and ``hours`` stay 0.
    """

    days: int = 0
    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    is_late: bool = False

    @property
    def total_seconds(self) -> int:
        return self.days * 86400 + self.hours * 3600 + self.minutes * 60 + self.seconds


ZERO_STATE = TemporalState()


@dataclass(slots=True, frozen=True)
class StageFlags:
    pre_assessment_started: bool = False
    assessment_started: bool = False


@dataclass(slots=True, frozen=True)
class Locked:
    label: str = LOCKED_LABEL

    @property
    def unlocked(self) -> bool:
        return False


@dataclass(slots=True, frozen=True)
class Unlocked:
    label: str

    @property
    def unlocked(self) -> bool:
        return True


EntryLatch = Locked | Unlocked


@dataclass(slots=True, frozen=True)
class GateReading:
    """Everything the dashboard needs to render one tick."""

    countdown: TemporalState
    phase: GatePhase
    latch: EntryLatch
    tick_seconds: int | None

    @property
    def entry_enabled(self) -> bool:
        return self.phase.allows_entry

    @property
    def is_late(self) -> bool:
        return self.countdown.is_late

    @property
    def label(self) -> str:
        return self.latch.label

    @property
    def heading(self) -> str:
        return LATE_HEADING if self.countdown.is_late else UPCOMING_HEADING


def parse_schedule(value: str | datetime | None, *, tz: str | None = None) -> datetime | None:
    """Parse a scheduled timestamp into an aware datetime.

    Naive values are read in the schedule timezone. Anything unparseable yields
    ``None``.
    """
    if value is None:
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            logger.warning("schedule_unparseable", value=value)
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_schedule_zone(tz))
    return parsed


def _schedule_zone(tz: str | None):
    name = tz or get_settings().schedule_timezone
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        logger.warning("schedule_timezone_unknown", timezone=name)
        return UTC


def _diff_ms(scheduled_at: datetime, now: datetime) -> int:
    if scheduled_at.tzinfo is None:
        scheduled_at = scheduled_at.replace(tzinfo=_schedule_zone(None))
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    return (scheduled_at - now) // timedelta(milliseconds=1)


def compute_temporal_state(scheduled_at: datetime | None, now: datetime) -> TemporalState:
    if scheduled_at is None:
        return ZERO_STATE

    diff = _diff_ms(scheduled_at, now)
    if diff <= 0:
        late_ms = abs(diff)
        return TemporalState(
            minutes=late_ms // MS_PER_MINUTE,
            seconds=(late_ms % MS_PER_MINUTE) // MS_PER_SECOND,
            is_late=True,
        )

    return TemporalState(
        days=diff // MS_PER_DAY,
        hours=(diff % MS_PER_DAY) // MS_PER_HOUR,
        minutes=(diff % MS_PER_HOUR) // MS_PER_MINUTE,
        seconds=(diff % MS_PER_MINUTE) // MS_PER_SECOND,
    )


def classify(state: TemporalState, *, scheduled: bool = True) -> GatePhase:
    if not scheduled:
        return GatePhase.WAITING
    if state.is_late:
        late_seconds = state.minutes * 60 + state.seconds
        return GatePhase.ACTIVE if late_seconds <= LATE_GRACE_SECONDS else GatePhase.EXPIRED
    return GatePhase.URGENT if state.total_seconds < ENTRY_WINDOW_SECONDS else GatePhase.WAITING


def tick_interval(scheduled_at: datetime | None, now: datetime) -> int | None:
    """Seconds until the next recomputation; ``None`` when nothing is scheduled."""
    if scheduled_at is None:
        return None
    if _diff_ms(scheduled_at, now) > SLOW_TICK_THRESHOLD_MS:
        return SLOW_TICK_SECONDS
    return FAST_TICK_SECONDS


def unlock_label(flags: StageFlags) -> str:
    if flags.pre_assessment_started:
        return PRE_ASSESSMENT_LABEL
    if flags.assessment_started:
        return ASSESSMENT_LABEL
    return EXAM_LABEL


def latch_from_label(label: str | None) -> EntryLatch:
    """Rebuild a latch from a label the client held on to.

    Only an unlock label counts as a frozen latch. Anything else, the locked label
    included, starts from ``Locked`` so the next enabled reading picks the label.
    """
    if label in UNLOCK_LABELS:
        return Unlocked(label=label)
    return Locked()


def advance_latch(latch: EntryLatch, entry_enabled: bool, flags: StageFlags) -> EntryLatch:
    """Move the latch forward; an unlocked latch is returned untouched."""
    if isinstance(latch, Unlocked):
        return latch
    if entry_enabled:
        return Unlocked(label=unlock_label(flags))
    return latch


def read_gate(
    scheduled_at: datetime | None,
    now: datetime,
    *,
    flags: StageFlags | None = None,
    latch: EntryLatch | None = None,
) -> GateReading:
    """Compute one gate reading without keeping any state."""
    flags = flags or StageFlags()
    countdown = compute_temporal_state(scheduled_at, now)
    phase = classify(countdown, scheduled=scheduled_at is not None)
    return GateReading(
        countdown=countdown,
        phase=phase,
        latch=advance_latch(latch or Locked(), phase.allows_entry, flags),
        tick_seconds=tick_interval(scheduled_at, now),
    )


@dataclass(slots=True)
class EntryGate:
    """Page-scoped gate: owns the latch for as long as the dashboard is open."""

    scheduled_at: datetime | None
    flags: StageFlags = field(default_factory=StageFlags)
    latch: EntryLatch = field(default_factory=Locked)

    @classmethod
    def from_schedule(
        cls,
        value: str | datetime | None,
        *,
        flags: StageFlags | None = None,
        tz: str | None = None,
    ) -> EntryGate:
        return cls(scheduled_at=parse_schedule(value, tz=tz), flags=flags or StageFlags())

    @property
    def unlocked(self) -> bool:
        return self.latch.unlocked

    def read(self, now: datetime) -> GateReading:
        reading = read_gate(self.scheduled_at, now, flags=self.flags, latch=self.latch)
        if reading.latch is not self.latch:
            logger.info(
                "entry_gate_unlocked",
                phase=reading.phase.value,
                label=reading.label,
                late=reading.is_late,
            )
            self.latch = reading.latch
        return reading
