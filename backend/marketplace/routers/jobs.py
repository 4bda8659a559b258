from fastapi import APIRouter, Depends, Query

from marketplace.config import settings
from marketplace.dependencies import current_actor, get_store
from marketplace.models.job import Job
from marketplace.routers.profiles import profile_summary
from marketplace.schemas.job import (
    JobCreate,
    JobDetailResponse,
    JobListResponse,
    JobResponse,
    ViewerResponse,
)
from marketplace.services.application_service import ViewerState, application_workflow
from marketplace.services.job_service import JobFilter, job_catalog
from marketplace.services.store import Store

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _job_fields(job: Job) -> dict:
    return dict(
        id=job.id,
        poster_id=job.poster_id,
        title=job.title,
        description=job.description,
        category=job.category,
        location=job.location,
        budget=job.budget,
        duration=job.duration,
        requirements=job.requirements,
        contact_info=job.contact_info,
        status=job.status,
        created_at=job.created_at,
        updated_at=job.updated_at,
        poster=profile_summary(job.poster),
    )


def _job_to_response(job: Job) -> JobResponse:
    return JobResponse(**_job_fields(job))


def _viewer_to_response(viewer: ViewerState) -> ViewerResponse:
    return ViewerResponse(
        is_poster=viewer.is_poster,
        can_apply=viewer.can_apply,
        application_id=viewer.application.id if viewer.application else None,
        application_status=viewer.application.status if viewer.application else None,
    )


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(
    req: JobCreate,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    job = job_catalog.create_job(
        store,
        actor,
        title=req.title,
        description=req.description,
        category=req.category,
        location=req.location,
        budget=req.budget,
        duration=req.duration,
        requirements=req.requirements,
        contact_info=req.contact_info,
    )
    return _job_to_response(job)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    search: str | None = None,
    category: str | None = None,
    sort: str | None = None,
    limit: int | None = Query(None, ge=1, le=settings.max_list_limit),
    store: Store = Depends(get_store),
):
    jobs = job_catalog.list_jobs(store, JobFilter.from_params(search, category, sort, limit))
    return JobListResponse(jobs=[_job_to_response(j) for j in jobs], total=len(jobs))


@router.get("/recent", response_model=JobListResponse)
async def recent_jobs(store: Store = Depends(get_store)):
    jobs = job_catalog.list_recent_jobs(store)
    return JobListResponse(jobs=[_job_to_response(j) for j in jobs], total=len(jobs))


@router.get("/{job_id}", response_model=JobDetailResponse)
async def get_job(
    job_id: str,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    job = job_catalog.get_job(store, job_id)
    viewer = None
    if actor is not None:
        viewer = _viewer_to_response(application_workflow.viewer_state(store, actor, job))
    return JobDetailResponse(**_job_fields(job), viewer=viewer)


@router.post("/{job_id}/close", response_model=JobResponse)
async def close_job(
    job_id: str,
    actor: str | None = Depends(current_actor),
    store: Store = Depends(get_store),
):
    job = job_catalog.close_job(store, actor, job_id)
    return _job_to_response(job)
