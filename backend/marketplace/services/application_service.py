import logging
from dataclasses import dataclass

from sqlalchemy.orm import joinedload

from marketplace.config import settings
from marketplace.enums import ApplicationStatus, JobStatus, parse_decision, transition_sources
from marketplace.errors import (
    AlreadyDecided,
    DuplicateApplication,
    Forbidden,
    InvalidInput,
    InvalidRate,
    JobNotOpen,
    NotFound,
    SelfApplicationForbidden,
    StoreConflict,
    Unauthenticated,
)
from marketplace.models.application import Application
from marketplace.models.job import Job
from marketplace.services import policy
from marketplace.services.job_service import job_catalog
from marketplace.services.store import Store
from marketplace.utils.validation import parse_positive_amount, require_text, utc_now

logger = logging.getLogger("marketplace.applications")


@dataclass
class ViewerState:
    """What the job detail page needs to know about the current actor."""

    is_poster: bool
    can_apply: bool
    application: Application | None


class ApplicationWorkflow:
    def submit_application(
        self,
        store: Store,
        actor: str | None,
        job_id: str,
        message: str | None,
        proposed_rate=None,
    ) -> Application:
        if actor is None:
            raise Unauthenticated("You must be signed in to apply")
        job = job_catalog.get_job(store, job_id)
        if job.status != JobStatus.ACTIVE:
            raise JobNotOpen()
        if policy.is_poster(actor, job):
            raise SelfApplicationForbidden()
        if self._find_own(store, actor, job_id) is not None:
            raise DuplicateApplication()
        text = require_text(message, "Message")
        rate = None
        if proposed_rate is not None and str(proposed_rate).strip() != "":
            rate = parse_positive_amount(proposed_rate, InvalidRate)

        try:
            application = store.insert(
                Application,
                {
                    "job_id": job_id,
                    "applicant_id": actor,
                    "message": text,
                    "proposed_rate": rate,
                    "status": ApplicationStatus.PENDING.value,
                    "applied_at": utc_now(),
                },
            )
        except StoreConflict as exc:
            if self._find_own(store, actor, job_id) is not None:
                # A concurrent submission from the same actor won the unique index.
                logger.warning("Duplicate application blocked by store | job=%s | applicant=%s", job_id, actor)
                raise DuplicateApplication() from exc
            logger.warning("Application rejected by store | job=%s | applicant=%s | %s", job_id, actor, exc.detail)
            raise InvalidInput("Application could not be saved") from exc

        logger.info("Application created | id=%s | job=%s | applicant=%s", application.id, job_id, actor)
        return application

    def list_applications_for_job(self, store: Store, actor: str | None, job_id: str) -> list[Application]:
        if actor is None:
            raise Unauthenticated()
        job = job_catalog.get_job(store, job_id)
        if not policy.can_manage_applications(actor, job):
            raise Forbidden("Only the poster can view applications for this job")
        return store.query_many(
            Application,
            Application.job_id == job_id,
            order_by=(Application.applied_at.desc(),),
            options=(joinedload(Application.applicant),),
        )

    def get_own_application(self, store: Store, actor: str | None, job_id: str) -> Application:
        if actor is None:
            raise Unauthenticated()
        application = self._find_own(store, actor, job_id)
        if application is None:
            raise NotFound("You have not applied to this job")
        return application

    def decide_application(self, store: Store, actor: str | None, application_id: str, decision: str) -> Application:
        if actor is None:
            raise Unauthenticated()
        parsed = parse_decision(decision)

        application = store.query_one(Application, Application.id == application_id)
        if application is None:
            raise NotFound("Application not found")
        job = store.query_one(Job, Job.id == application.job_id)
        if job is None:
            raise NotFound("Job not found")
        if not policy.can_manage_applications(actor, job):
            raise Forbidden("Only the poster can decide on applications")
        if not policy.can_decide(actor, application, job):
            raise AlreadyDecided(f"Application is already {application.status}")

        target = parsed.resulting_status
        updated = store.update(
            Application,
            application_id,
            {"status": target.value, "decided_at": utc_now()},
            Application.status.in_(transition_sources(target)),
        )
        if updated is None:
            logger.warning("Lost race deciding application %s", application_id)
            raise AlreadyDecided()
        logger.info("Application %s | id=%s | job=%s", target.value, application_id, job.id)

        if target == ApplicationStatus.ACCEPTED:
            self._apply_acceptance_policy(store, job, application_id)
        return updated

    def viewer_state(self, store: Store, actor: str | None, job: Job) -> ViewerState:
        application = self._find_own(store, actor, job.id) if actor is not None else None
        return ViewerState(
            is_poster=policy.is_poster(actor, job),
            can_apply=policy.can_apply(actor, job) and application is None,
            application=application,
        )

    def _find_own(self, store: Store, actor: str, job_id: str) -> Application | None:
        return store.query_one(
            Application,
            Application.job_id == job_id,
            Application.applicant_id == actor,
        )

    def _apply_acceptance_policy(self, store: Store, job: Job, accepted_id: str):
        if settings.reject_pending_on_accept:
            rejected = store.update_where(
                Application,
                [
                    Application.job_id == job.id,
                    Application.id != accepted_id,
                    Application.status == ApplicationStatus.PENDING.value,
                ],
                {"status": ApplicationStatus.REJECTED.value, "decided_at": utc_now()},
            )
            logger.info("Rejected %d sibling applications | job=%s", rejected, job.id)
        if settings.fill_job_on_accept:
            job_catalog.mark_filled(store, job)


application_workflow = ApplicationWorkflow()
