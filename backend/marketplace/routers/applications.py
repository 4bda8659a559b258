from fastapi import APIRouter, Depends

from marketplace.dependencies import current_actor, get_store
from marketplace.models.application import Application
from marketplace.routers.profiles import profile_summary
from marketplace.schemas.application import (
    ApplicationCreate,
    ApplicationListResponse,
    ApplicationResponse,
    DecisionRequest,
)
from marketplace.services.application_service import application_workflow
from marketplace.services.store import Store

router = APIRouter(tags=["applications"])


def _application_to_response(application: Application, with_applicant: bool = False) -> ApplicationResponse:
    return ApplicationResponse(
        id=application.id,
        job_id=application.job_id,
        applicant_id=application.applicant_id,
        message=application.message,
        proposed_rate=application.proposed_rate,
        status=application.status,
        applied_at=application.applied_at,
        decided_at=application.decided_at,
        applicant=profile_summary(application.applicant) if with_applicant else None,
    )


@router.post("/jobs/{job_id}/applications", response_model=ApplicationResponse, status_code=201)
async def submit_application(
    job_id: str,
    req: ApplicationCreate,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    application = application_workflow.submit_application(
        store, actor, job_id, req.message, req.proposed_rate
    )
    return _application_to_response(application)


@router.get("/jobs/{job_id}/applications", response_model=ApplicationListResponse)
async def list_applications(
    job_id: str,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    applications = application_workflow.list_applications_for_job(store, actor, job_id)
    return ApplicationListResponse(
        applications=[_application_to_response(a, with_applicant=True) for a in applications],
        total=len(applications),
    )


@router.get("/jobs/{job_id}/applications/mine", response_model=ApplicationResponse)
async def my_application(
    job_id: str,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    application = application_workflow.get_own_application(store, actor, job_id)
    return _application_to_response(application)


@router.post("/applications/{application_id}/decision", response_model=ApplicationResponse)
async def decide_application(
    application_id: str,
    req: DecisionRequest,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    application = application_workflow.decide_application(store, actor, application_id, req.decision)
    return _application_to_response(application)
