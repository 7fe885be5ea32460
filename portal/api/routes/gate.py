from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import structlog
from fastapi import APIRouter, Depends
from portal.api.deps import get_clock, get_notifier, require_roles
from portal.api.schemas.gate import (
    CountdownResponse,
    EntryRequest,
    EntryResponse,
    GateEvaluateRequest,
    GateEvaluateResponse,
)
from portal.domain import User
from portal.domain.services.entry_gate import (
    StageFlags,
    latch_from_label,
    parse_schedule,
    read_gate,
)
from portal.domain.services.navigation import resolve_entry_target
from portal.domain.services.notifications import CollectingNotifier

router = APIRouter(prefix="/gate", tags=["Entry gate"])
logger = structlog.get_logger()


@router.post("/evaluate", response_model=GateEvaluateResponse)
async def evaluate_gate(
    payload: GateEvaluateRequest,
    user: User = Depends(require_roles(["Asesi"])),  # noqa: B008
    clock: Callable[[], datetime] = Depends(get_clock),  # noqa: B008
) -> GateEvaluateResponse:
    """
    Evaluate the exam entry gate at the current server time.

    The latch lives with the client: a label frozen by an earlier call is sent back
    as ``latch_label`` and stays in place whatever this reading says. Echoing the
    locked label back is the same as sending nothing.
    """
    now = clock()
    latch = latch_from_label(payload.latch_label)
    reading = read_gate(
        parse_schedule(payload.scheduled_at),
        now,
        flags=StageFlags(
            pre_assessment_started=payload.pre_assessment_started,
            assessment_started=payload.assessment_started,
        ),
        latch=latch,
    )

    if reading.latch is not latch:
        logger.info("entry_gate_unlocked", user_id=user.user_id, label=reading.label)

    countdown = reading.countdown
    return GateEvaluateResponse(
        countdown=CountdownResponse(
            days=countdown.days,
            hours=countdown.hours,
            minutes=countdown.minutes,
            seconds=countdown.seconds,
            is_late=countdown.is_late,
        ),
        phase=reading.phase.value,
        heading=reading.heading,
        entry_enabled=reading.entry_enabled,
        unlocked=reading.latch.unlocked,
        label=reading.label,
        tick_seconds=reading.tick_seconds,
        evaluated_at=now.isoformat(),
    )


@router.post("/enter", response_model=EntryResponse)
async def enter(
    payload: EntryRequest,
    user: User = Depends(require_roles(["Asesi"])),  # noqa: B008
    notifier: CollectingNotifier = Depends(get_notifier),  # noqa: B008
) -> EntryResponse:
    target = resolve_entry_target(payload.stage, payload.permit_id, notifier)
    logger.info("entry_requested", user_id=user.user_id, stage=payload.stage, target=target)
    return EntryResponse(target=target, messages=notifier.messages)
