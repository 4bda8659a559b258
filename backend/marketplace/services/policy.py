"""
Authorization policy.

Pure predicates over in-memory values: no session, no I/O. ``actor`` is the
caller's profile id or None when unauthenticated. ``job`` and
``application`` are anything exposing ``poster_id`` / ``status``.
"""
from marketplace.enums import Decision, JobStatus, can_transition


def is_poster(actor: str | None, job) -> bool:
    return actor is not None and actor == job.poster_id


def can_apply(actor: str | None, job) -> bool:
    return actor is not None and actor != job.poster_id and job.status == JobStatus.ACTIVE


def can_manage_applications(actor: str | None, job) -> bool:
    return is_poster(actor, job)


def can_decide(actor: str | None, application, job) -> bool:
    return can_manage_applications(actor, job) and any(
        can_transition(application.status, decision.resulting_status) for decision in Decision
    )


def can_close_job(actor: str | None, job) -> bool:
    return can_manage_applications(actor, job) and can_transition(job.status, JobStatus.CLOSED)
