from fastapi import Depends, Header
from sqlalchemy.orm import Session

from marketplace.database import get_db
from marketplace.errors import Unauthenticated
from marketplace.services.identity_service import identity_service
from marketplace.services.store import Store


def get_store(db: Session = Depends(get_db)) -> Store:
    return Store(db)


def bearer_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[7:]


async def current_actor(token: str | None = Depends(bearer_token)) -> str | None:
    """Resolve the caller to a profile id. Missing or expired tokens give None;
    each operation decides whether an anonymous caller is acceptable."""
    return identity_service.resolve(token)


async def require_actor(actor: str | None = Depends(current_actor)) -> str:
    if actor is None:
        raise Unauthenticated()
    return actor
