from pydantic import BaseModel


class ProfileCreate(BaseModel):
    email: str
    full_name: str
    passphrase: str


class ProfileResponse(BaseModel):
    id: str
    email: str
    full_name: str
    rating: float | None
    total_reviews: int
    created_at: str


class ProfileSummary(BaseModel):
    id: str
    full_name: str
    rating: float | None  # None = no reviews yet, never coerced to 0
    rating_display: str
    total_reviews: int = 0


class SignInRequest(BaseModel):
    email: str
    passphrase: str


class SessionResponse(BaseModel):
    token: str
    profile_id: str
    expires_in_seconds: int
