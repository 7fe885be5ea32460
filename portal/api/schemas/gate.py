from __future__ import annotations

from pydantic import BaseModel, Field


class GateEvaluateRequest(BaseModel):
    scheduled_at: str | None = Field(None, description="Scheduled exam time (tanggal_uji)")
    pre_assessment_started: bool = False
    assessment_started: bool = False
    latch_label: str | None = Field(
        None, description="Label frozen by an earlier unlock; keeps the latch unlocked"
    )


class CountdownResponse(BaseModel):
    days: int
    hours: int
    minutes: int
    seconds: int
    is_late: bool


class GateEvaluateResponse(BaseModel):
    countdown: CountdownResponse
    phase: str
    heading: str
    entry_enabled: bool
    unlocked: bool
    label: str
    tick_seconds: int | None = Field(None, description="Seconds until the next evaluation")
    evaluated_at: str


class EntryRequest(BaseModel):
    stage: str | None = Field(None, description="Session stage (tahap): '1' or '2'")
    permit_id: str | None = Field(None, description="Permit id (id_izin) of the assessee")


class EntryResponse(BaseModel):
    target: str | None
    messages: list[str] = Field(default_factory=list)
