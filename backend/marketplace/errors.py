"""
Typed failures of the marketplace core.

Services raise these; the HTTP layer renders them through a single
exception handler as ``{"error": <kind>, "detail": <message>}``.
Only ``StoreUnavailable`` is retryable, and retrying is left to the caller.
"""


class MarketplaceError(Exception):
    kind = "MarketplaceError"
    status_code = 400
    retryable = False
    default_detail = "Request failed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthenticated(MarketplaceError):
    kind = "Unauthenticated"
    status_code = 401
    default_detail = "You must be signed in"


class InvalidCredentials(MarketplaceError):
    kind = "InvalidCredentials"
    status_code = 401
    default_detail = "Invalid email or passphrase"


class NotFound(MarketplaceError):
    kind = "NotFound"
    status_code = 404
    default_detail = "Not found"


class Forbidden(MarketplaceError):
    kind = "Forbidden"
    status_code = 403
    default_detail = "Not allowed"


# --- malformed request data ---

class InvalidInput(MarketplaceError):
    kind = "InvalidInput"
    default_detail = "Invalid input"


class InvalidCategory(InvalidInput):
    kind = "InvalidCategory"
    default_detail = "Invalid category"


class InvalidBudget(InvalidInput):
    kind = "InvalidBudget"
    default_detail = "Budget must be a positive amount"


class InvalidRate(InvalidInput):
    kind = "InvalidRate"
    default_detail = "Proposed rate must be a positive amount"


# --- workflow preconditions ---

class JobNotOpen(MarketplaceError):
    kind = "JobNotOpen"
    status_code = 409
    default_detail = "Job is no longer accepting applications"


class SelfApplicationForbidden(MarketplaceError):
    kind = "SelfApplicationForbidden"
    status_code = 403
    default_detail = "You cannot apply to your own job"


class DuplicateApplication(MarketplaceError):
    kind = "DuplicateApplication"
    status_code = 409
    default_detail = "You have already applied to this job"


class AlreadyDecided(MarketplaceError):
    kind = "AlreadyDecided"
    status_code = 409
    default_detail = "Application has already been decided"


class AccountExists(MarketplaceError):
    kind = "AccountExists"
    status_code = 409
    default_detail = "A profile with this email already exists"


# --- persistence ---

class StoreConflict(MarketplaceError):
    """Integrity violation reported by the store; callers translate it."""

    kind = "StoreConflict"
    status_code = 409
    default_detail = "Conflicting record"


class StoreUnavailable(MarketplaceError):
    kind = "StoreUnavailable"
    status_code = 503
    retryable = True
    default_detail = "Storage is temporarily unavailable"
