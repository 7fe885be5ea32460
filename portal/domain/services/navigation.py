from __future__ import annotations

import structlog
from portal.domain.services.notifications import Notifier
from portal.domain.services.steps import (
    ASSESSEE_STEPS,
    PRE_ASSESSMENT_BASE,
    assessment_href,
)

logger = structlog.get_logger()

PRE_ASSESSMENT_STAGE = "1"
ASSESSMENT_STAGE = "2"

MISSING_PERMIT_MESSAGE = "ID Izin tidak ditemukan"


def resolve_entry_target(
    stage: str | None,
    permit_id: str | None,
    notifier: Notifier,
) -> str | None:
    """Where the dashboard's enter button leads for the session's current stage.

    Returns ``None`` when there is nowhere to go. A missing permit id is reported
    through ``notifier``; an unknown stage is not.
    """
    if not permit_id:
        notifier.notify(MISSING_PERMIT_MESSAGE, "error")
        return None

    if stage == PRE_ASSESSMENT_STAGE:
        return PRE_ASSESSMENT_BASE
    if stage == ASSESSMENT_STAGE:
        return assessment_href(ASSESSEE_STEPS[0], permit_id)

    logger.info("entry_stage_unknown", stage=stage, permit_id=permit_id)
    return None
