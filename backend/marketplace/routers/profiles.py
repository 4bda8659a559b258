from fastapi import APIRouter, Depends

from marketplace.dependencies import bearer_token, get_store, require_actor
from marketplace.errors import NotFound
from marketplace.models.profile import Profile
from marketplace.schemas.profile import (
    ProfileCreate,
    ProfileResponse,
    ProfileSummary,
    SessionResponse,
    SignInRequest,
)
from marketplace.services.identity_service import identity_service
from marketplace.services.store import Store

router = APIRouter(tags=["profiles"])


def profile_summary(profile: Profile | None) -> ProfileSummary | None:
    if profile is None:
        return None
    return ProfileSummary(
        id=profile.id,
        full_name=profile.full_name,
        rating=profile.rating,
        rating_display="unrated" if profile.rating is None else f"{profile.rating:.1f}",
        total_reviews=profile.total_reviews or 0,
    )


def _profile_to_response(profile: Profile) -> ProfileResponse:
    return ProfileResponse(
        id=profile.id,
        email=profile.email,
        full_name=profile.full_name,
        rating=profile.rating,
        total_reviews=profile.total_reviews or 0,
        created_at=profile.created_at,
    )


@router.post("/profiles", response_model=ProfileResponse, status_code=201)
async def register(req: ProfileCreate, store: Store = Depends(get_store)):
    profile = identity_service.register(store, req.email, req.full_name, req.passphrase)
    return _profile_to_response(profile)


@router.get("/profiles/me", response_model=ProfileResponse)
async def my_profile(actor: str = Depends(require_actor), store: Store = Depends(get_store)):
    profile = identity_service.get_profile(store, actor)
    if profile is None:
        raise NotFound("Profile not found")
    return _profile_to_response(profile)


@router.post("/sessions", response_model=SessionResponse)
async def sign_in(req: SignInRequest, store: Store = Depends(get_store)):
    return SessionResponse(**identity_service.sign_in(store, req.email, req.passphrase))


@router.delete("/sessions")
async def sign_out(token: str | None = Depends(bearer_token), _actor: str = Depends(require_actor)):
    identity_service.sign_out(token)
    return {"message": "Signed out"}
