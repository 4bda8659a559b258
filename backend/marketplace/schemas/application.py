from pydantic import BaseModel

from marketplace.schemas.profile import ProfileSummary


class ApplicationCreate(BaseModel):
    message: str | None = None
    proposed_rate: str | float | None = None


class DecisionRequest(BaseModel):
    decision: str


class ApplicationResponse(BaseModel):
    id: str
    job_id: str
    applicant_id: str
    message: str
    proposed_rate: float | None
    status: str
    applied_at: str
    decided_at: str | None
    applicant: ProfileSummary | None = None


class ApplicationListResponse(BaseModel):
    applications: list[ApplicationResponse]
    total: int
