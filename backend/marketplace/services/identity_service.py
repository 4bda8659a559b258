import logging
import time

from marketplace.config import settings
from marketplace.errors import AccountExists, InvalidCredentials, InvalidInput, StoreConflict
from marketplace.models.profile import Profile
from marketplace.services.store import Store
from marketplace.utils.security import generate_token, hash_passphrase, verify_passphrase
from marketplace.utils.validation import require_text, utc_now

logger = logging.getLogger("marketplace.identity")


class IdentityService:
    """Local identity provider: profiles, passphrases and bearer sessions.

    The marketplace core never calls into this directly; routes resolve the
    bearer token to an actor id and pass it down explicitly.
    """

    def __init__(self):
        self._active_tokens: dict[str, tuple[str, float]] = {}  # token -> (profile_id, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: entry for t, entry in self._active_tokens.items() if entry[1] > now
        }

    def register(self, store: Store, email: str, full_name: str, passphrase: str) -> Profile:
        email = require_text(email, "Email").lower()
        if len(passphrase or "") < 8:
            raise InvalidInput("Passphrase must be at least 8 characters")
        try:
            profile = store.insert(
                Profile,
                {
                    "email": email,
                    "full_name": require_text(full_name, "Full name"),
                    "passphrase_hash": hash_passphrase(passphrase),
                    "rating": None,
                    "total_reviews": 0,
                    "created_at": utc_now(),
                },
            )
        except StoreConflict as exc:
            raise AccountExists() from exc
        logger.info("Profile registered | id=%s", profile.id)
        return profile

    def sign_in(self, store: Store, email: str, passphrase: str) -> dict:
        profile = store.query_one(Profile, Profile.email == (email or "").strip().lower())
        if profile is None or not verify_passphrase(profile.passphrase_hash, passphrase):
            logger.info("Failed sign-in attempt")
            raise InvalidCredentials()

        token = generate_token()
        self._active_tokens[token] = (profile.id, time.time() + settings.session_ttl_seconds)
        logger.info("Session opened | profile=%s", profile.id)
        return {"token": token, "profile_id": profile.id, "expires_in_seconds": settings.session_ttl_seconds}

    def sign_out(self, token: str):
        self._active_tokens.pop(token, None)

    def resolve(self, token: str | None) -> str | None:
        """Return the profile id behind a live token, or None."""
        if not token:
            return None
        self._cleanup_expired()
        entry = self._active_tokens.get(token)
        return entry[0] if entry else None

    def get_profile(self, store: Store, profile_id: str) -> Profile | None:
        return store.query_one(Profile, Profile.id == profile_id)


identity_service = IdentityService()
