"""
Unit tests for the exam entry gate.

Covers countdown breakdown, phase boundaries, tick interval selection, the one-way
latch and timestamp parsing.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from portal.domain.services.entry_gate import (
    ASSESSMENT_LABEL,
    EXAM_LABEL,
    LATE_HEADING,
    LOCKED_LABEL,
    PRE_ASSESSMENT_LABEL,
    UPCOMING_HEADING,
    EntryGate,
    GatePhase,
    Locked,
    StageFlags,
    TemporalState,
    Unlocked,
    advance_latch,
    classify,
    compute_temporal_state,
    latch_from_label,
    parse_schedule,
    read_gate,
    tick_interval,
    unlock_label,
)

NOW = datetime(2025, 3, 3, 1, 0, 0, tzinfo=UTC)


def at(**delta) -> datetime:
    return NOW + timedelta(**delta)


class TestTemporalState:
    def test_breakdown_before_schedule(self) -> None:
        state = compute_temporal_state(at(days=2, hours=3, minutes=4, seconds=5), NOW)

        assert state == TemporalState(days=2, hours=3, minutes=4, seconds=5, is_late=False)

    def test_sub_second_remainder_is_floored(self) -> None:
        state = compute_temporal_state(at(seconds=59, milliseconds=999), NOW)

        assert (state.minutes, state.seconds) == (0, 59)

    def test_lateness_is_minutes_and_seconds_only(self) -> None:
        state = compute_temporal_state(at(hours=-2, minutes=-5, seconds=-7), NOW)

        assert state == TemporalState(days=0, hours=0, minutes=125, seconds=7, is_late=True)

    def test_exact_schedule_is_late_by_zero(self) -> None:
        state = compute_temporal_state(NOW, NOW)

        assert state == TemporalState(is_late=True)

    def test_missing_schedule_is_all_zero(self) -> None:
        assert compute_temporal_state(None, NOW) == TemporalState()

    def test_naive_now_is_treated_as_utc(self) -> None:
        state = compute_temporal_state(at(minutes=10), NOW.replace(tzinfo=None))

        assert state.minutes == 10


class TestPhases:
    def test_twenty_minutes_before_is_waiting(self) -> None:
        reading = read_gate(at(minutes=20), NOW)

        assert reading.phase is GatePhase.WAITING
        assert reading.entry_enabled is False

    def test_ten_minutes_before_is_urgent(self) -> None:
        reading = read_gate(at(minutes=10), NOW)

        assert reading.phase is GatePhase.URGENT
        assert reading.entry_enabled is True

    def test_thirty_minutes_late_is_active(self) -> None:
        reading = read_gate(at(minutes=-30), NOW)

        assert reading.phase is GatePhase.ACTIVE
        assert reading.is_late is True
        assert reading.countdown.minutes == 30
        assert reading.entry_enabled is True

    def test_ninety_minutes_late_is_expired(self) -> None:
        reading = read_gate(at(minutes=-90), NOW)

        assert reading.phase is GatePhase.EXPIRED
        assert reading.entry_enabled is False

    def test_window_opens_below_fifteen_minutes(self) -> None:
        assert read_gate(at(minutes=15), NOW).phase is GatePhase.WAITING
        assert read_gate(at(minutes=14, seconds=59), NOW).phase is GatePhase.URGENT

    def test_grace_ends_after_sixty_minutes(self) -> None:
        assert read_gate(at(minutes=-60), NOW).phase is GatePhase.ACTIVE
        assert read_gate(at(minutes=-60, seconds=-1), NOW).phase is GatePhase.EXPIRED

    def test_unscheduled_is_waiting(self) -> None:
        reading = read_gate(None, NOW)

        assert reading.phase is GatePhase.WAITING
        assert reading.countdown == TemporalState()
        assert reading.entry_enabled is False
        assert reading.tick_seconds is None

    def test_classify_unscheduled_ignores_state(self) -> None:
        assert classify(TemporalState(is_late=True), scheduled=False) is GatePhase.WAITING

    def test_headings(self) -> None:
        assert read_gate(at(minutes=5), NOW).heading == UPCOMING_HEADING
        assert read_gate(at(minutes=-5), NOW).heading == LATE_HEADING


class TestTickInterval:
    def test_minute_ticks_far_from_schedule(self) -> None:
        assert tick_interval(at(hours=1, seconds=1), NOW) == 60

    def test_second_ticks_within_the_hour(self) -> None:
        assert tick_interval(at(hours=1), NOW) == 1
        assert tick_interval(at(minutes=5), NOW) == 1

    def test_second_ticks_when_late(self) -> None:
        assert tick_interval(at(minutes=-5), NOW) == 1

    def test_no_ticks_without_schedule(self) -> None:
        assert tick_interval(None, NOW) is None


class TestLatch:
    @pytest.mark.parametrize(
        ("flags", "label"),
        [
            (StageFlags(pre_assessment_started=True), PRE_ASSESSMENT_LABEL),
            (StageFlags(pre_assessment_started=True, assessment_started=True), PRE_ASSESSMENT_LABEL),
            (StageFlags(assessment_started=True), ASSESSMENT_LABEL),
            (StageFlags(), EXAM_LABEL),
        ],
    )
    def test_unlock_label_precedence(self, flags: StageFlags, label: str) -> None:
        assert unlock_label(flags) == label

    def test_locked_latch_stays_locked_while_disabled(self) -> None:
        latch = Locked()

        assert advance_latch(latch, False, StageFlags()) is latch
        assert latch.label == LOCKED_LABEL
        assert latch.unlocked is False

    def test_locked_latch_unlocks_once_enabled(self) -> None:
        latch = advance_latch(Locked(), True, StageFlags(assessment_started=True))

        assert latch == Unlocked(ASSESSMENT_LABEL)
        assert latch.unlocked is True

    def test_unlocked_latch_never_relocks(self) -> None:
        latch = Unlocked(EXAM_LABEL)

        assert advance_latch(latch, False, StageFlags()) is latch

    def test_unlocked_label_is_frozen(self) -> None:
        latch = Unlocked(EXAM_LABEL)

        assert advance_latch(latch, True, StageFlags(pre_assessment_started=True)) is latch

    @pytest.mark.parametrize("label", [PRE_ASSESSMENT_LABEL, ASSESSMENT_LABEL, EXAM_LABEL])
    def test_unlock_labels_rebuild_an_unlocked_latch(self, label: str) -> None:
        assert latch_from_label(label) == Unlocked(label)

    @pytest.mark.parametrize("label", [None, "", LOCKED_LABEL, "Masuk"])
    def test_other_labels_rebuild_a_locked_latch(self, label: str | None) -> None:
        assert latch_from_label(label) == Locked()

    def test_echoed_locked_label_unlocks_with_flag_label(self) -> None:
        reading = read_gate(at(minutes=5), NOW, latch=latch_from_label(LOCKED_LABEL))

        assert reading.latch == Unlocked(EXAM_LABEL)

    def test_read_gate_keeps_given_unlocked_latch(self) -> None:
        reading = read_gate(at(minutes=-90), NOW, latch=Unlocked(EXAM_LABEL))

        assert reading.entry_enabled is False
        assert reading.latch.unlocked is True
        assert reading.label == EXAM_LABEL


class TestEntryGate:
    def test_latch_survives_condition_turning_false(self) -> None:
        gate = EntryGate(scheduled_at=at(minutes=10))

        first = gate.read(NOW)
        # window closes without the user leaving the page
        later = gate.read(NOW + timedelta(minutes=75))

        assert first.entry_enabled is True
        assert later.phase is GatePhase.EXPIRED
        assert later.entry_enabled is False
        assert gate.unlocked is True
        assert later.label == first.label == EXAM_LABEL

    def test_label_does_not_follow_flag_changes_after_unlock(self) -> None:
        gate = EntryGate(scheduled_at=at(minutes=10))
        gate.read(NOW)

        gate.flags = StageFlags(pre_assessment_started=True)

        assert gate.read(NOW + timedelta(seconds=1)).label == EXAM_LABEL

    def test_stays_locked_far_from_schedule(self) -> None:
        gate = EntryGate(scheduled_at=at(days=1))

        for minute in range(3):
            reading = gate.read(NOW + timedelta(minutes=minute))
            assert reading.label == LOCKED_LABEL

        assert gate.unlocked is False

    def test_from_schedule_with_garbage_degrades_to_waiting(self) -> None:
        gate = EntryGate.from_schedule("not-a-date")

        reading = gate.read(NOW)

        assert gate.scheduled_at is None
        assert reading.phase is GatePhase.WAITING
        assert reading.countdown == TemporalState()

    def test_from_schedule_uses_flags(self) -> None:
        gate = EntryGate.from_schedule(
            "2025-03-03T01:05:00Z", flags=StageFlags(pre_assessment_started=True)
        )

        assert gate.read(NOW).label == PRE_ASSESSMENT_LABEL


class TestParseSchedule:
    def test_iso_with_offset(self) -> None:
        parsed = parse_schedule("2025-03-03T08:00:00+07:00")

        assert parsed == NOW

    def test_zulu_suffix(self) -> None:
        assert parse_schedule("2025-03-03T01:00:00Z") == NOW

    def test_naive_backend_format_uses_schedule_timezone(self) -> None:
        parsed = parse_schedule("2025-03-03 08:00:00", tz="Asia/Jakarta")

        assert parsed == NOW

    def test_naive_datetime_gets_timezone(self) -> None:
        parsed = parse_schedule(datetime(2025, 3, 3, 1, 0), tz="UTC")

        assert parsed == NOW

    def test_aware_datetime_passes_through(self) -> None:
        value = datetime(2025, 3, 3, 1, 0, tzinfo=timezone(timedelta(hours=2)))

        assert parse_schedule(value) is value

    def test_unknown_timezone_falls_back_to_utc(self) -> None:
        assert parse_schedule("2025-03-03 01:00:00", tz="Mars/Olympus") == NOW

    @pytest.mark.parametrize("value", [None, "", "   ", "31/12/2025", "soon"])
    def test_unparseable_values(self, value) -> None:
        assert parse_schedule(value) is None
