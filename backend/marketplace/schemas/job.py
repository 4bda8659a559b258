from pydantic import BaseModel

from marketplace.schemas.profile import ProfileSummary


class JobCreate(BaseModel):
    # Everything is optional here; the marketplace core owns validation so
    # malformed fields surface as InvalidInput / InvalidCategory / InvalidBudget.
    title: str | None = None
    description: str | None = None
    category: str | None = None
    location: str | None = None
    budget: str | float | None = None
    duration: str | None = None
    requirements: str | None = None
    contact_info: str | None = None


class JobResponse(BaseModel):
    id: str
    poster_id: str
    title: str
    description: str
    category: str
    location: str
    budget: float
    duration: str | None
    requirements: str | None
    contact_info: str | None
    status: str
    created_at: str
    updated_at: str
    poster: ProfileSummary | None = None


class ViewerResponse(BaseModel):
    is_poster: bool
    can_apply: bool
    application_id: str | None = None
    application_status: str | None = None


class JobDetailResponse(JobResponse):
    viewer: ViewerResponse | None = None


class JobListResponse(BaseModel):
    jobs: list[JobResponse]
    total: int
