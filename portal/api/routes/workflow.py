from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends, Query
from portal.api.deps import get_current_user, require_roles
from portal.api.schemas.workflow import (
    AssessmentWorkflowRequest,
    AssessmentWorkflowResponse,
    MenuItemResponse,
    NavigationResponse,
    RoleRequest,
    RoleResponse,
    StepItem,
    WorkflowResponse,
)
from portal.domain import AssignedAssessor, User, participant_from_user
from portal.domain.rbac import dashboard_route_for, default_route_for, get_role_config
from portal.domain.services.roles import RoleResolution, resolve_role
from portal.domain.services.steps import (
    StepSequence,
    assessment_href,
    completion_href,
    get_pre_assessment_steps,
    get_steps,
    next_step,
    pre_assessment_href,
    previous_step,
    step_number_for,
)

router = APIRouter(tags=["Workflow"])
logger = structlog.get_logger()

SESSION_ROLES = ["Asesor", "Asesi"]


@router.get("/navigation", response_model=NavigationResponse, summary="Role landing and menus")
async def navigation(user: User = Depends(get_current_user)) -> NavigationResponse:  # noqa: B008
    config = get_role_config(user.primary_role)
    return NavigationResponse(
        role=config.name if config else None,
        layout=config.layout if config else None,
        default_route=default_route_for(user.primary_role),
        permissions=sorted(config.permissions) if config else [],
        menus=[MenuItemResponse(title=m.title, path=m.path) for m in config.menus]
        if config
        else [],
    )


@router.post("/workflow/role", response_model=RoleResponse)
async def resolve_session_role(
    payload: RoleRequest,
    user: User = Depends(require_roles(SESSION_ROLES)),  # noqa: B008
) -> RoleResponse:
    resolution = _resolve(user, payload)
    return RoleResponse(role=resolution.role.value, index=resolution.index)


@router.post("/workflow/assessment", response_model=AssessmentWorkflowResponse)
async def assessment_workflow(
    payload: AssessmentWorkflowRequest,
    user: User = Depends(require_roles(SESSION_ROLES)),  # noqa: B008
) -> AssessmentWorkflowResponse:
    """Step list and position of the current user inside one assessment session."""
    participant = participant_from_user(user)
    resolution = _resolve(user, payload)
    steps = get_steps(participant.is_assessor, resolution.role)

    following = next_step(steps, payload.location)
    preceding = previous_step(steps, payload.location)

    return AssessmentWorkflowResponse(
        role=RoleResponse(role=resolution.role.value, index=resolution.index),
        is_assessor=participant.is_assessor,
        steps=_step_items(steps, lambda step: assessment_href(step, payload.session_id)),
        current_step=step_number_for(steps, payload.location),
        next_href=assessment_href(following, payload.session_id)
        if following
        else completion_href(payload.session_id),
        previous_href=assessment_href(preceding, payload.session_id) if preceding else None,
        dashboard_href=dashboard_route_for(participant.is_assessor),
        completion_href=completion_href(payload.session_id),
    )


@router.get("/workflow/pre-assessment", response_model=WorkflowResponse)
async def pre_assessment_workflow(
    location: str = Query("", description="Current front-end location"),
    user: User = Depends(require_roles(["Asesi"])),  # noqa: B008
) -> WorkflowResponse:
    steps = get_pre_assessment_steps()
    following = next_step(steps, location)
    preceding = previous_step(steps, location)
    return WorkflowResponse(
        steps=_step_items(steps, pre_assessment_href),
        current_step=step_number_for(steps, location),
        next_href=pre_assessment_href(following) if following else None,
        previous_href=pre_assessment_href(preceding) if preceding else None,
    )


def _resolve(user: User, payload: RoleRequest) -> RoleResolution:
    assignment = [
        AssignedAssessor(id=item.id, name=item.name, reg_no=item.reg_no)
        for item in payload.assessors
    ]
    resolution = resolve_role(participant_from_user(user), assignment)
    logger.info(
        "role_resolved",
        user_id=user.user_id,
        role=resolution.role.value,
        index=resolution.index,
        assigned=len(assignment),
    )
    return resolution


def _step_items(steps: StepSequence, href) -> list[StepItem]:
    return [
        StepItem(number=step.number, label=step.label, path=step.path, href=href(step))
        for step in steps
    ]
