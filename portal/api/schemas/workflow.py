from __future__ import annotations

from pydantic import BaseModel, Field


class AssignedAssessorItem(BaseModel):
    id: str
    name: str = ""
    reg_no: str | None = Field(None, description="Assessor registration number (noreg)")


class RoleRequest(BaseModel):
    assessors: list[AssignedAssessorItem] = Field(
        default_factory=list, description="Assessor list in assignment order"
    )


class RoleResponse(BaseModel):
    role: str
    index: int


class StepItem(BaseModel):
    number: int
    label: str
    path: str
    href: str


class AssessmentWorkflowRequest(RoleRequest):
    session_id: str = Field(..., description="Permit id (id_izin) of the assessment session")
    location: str = Field("", description="Current front-end location")


class WorkflowResponse(BaseModel):
    steps: list[StepItem]
    current_step: int
    next_href: str | None = None
    previous_href: str | None = None


class AssessmentWorkflowResponse(WorkflowResponse):
    role: RoleResponse
    is_assessor: bool
    dashboard_href: str
    completion_href: str


class MenuItemResponse(BaseModel):
    title: str
    path: str


class NavigationResponse(BaseModel):
    role: str | None
    layout: str | None
    default_route: str
    permissions: list[str]
    menus: list[MenuItemResponse]
