import logging
from dataclasses import dataclass

from sqlalchemy import or_
from sqlalchemy.orm import joinedload

from marketplace.config import settings
from marketplace.enums import (
    JobCategory,
    JobSort,
    JobStatus,
    coerce_category,
    coerce_sort,
    parse_category,
    transition_sources,
)
from marketplace.errors import (
    Forbidden,
    InvalidBudget,
    InvalidInput,
    JobNotOpen,
    NotFound,
    StoreConflict,
    Unauthenticated,
)
from marketplace.models.job import Job
from marketplace.services import policy
from marketplace.services.store import Store
from marketplace.utils.validation import (
    escape_like_pattern,
    optional_text,
    parse_positive_amount,
    require_text,
    utc_now,
)

logger = logging.getLogger("marketplace.jobs")

_ORDERINGS = {
    JobSort.NEWEST: (Job.created_at.desc(),),
    JobSort.BUDGET_HIGH: (Job.budget.desc(), Job.created_at.desc()),
    JobSort.BUDGET_LOW: (Job.budget.asc(), Job.created_at.desc()),
}


@dataclass
class JobFilter:
    search_term: str | None = None
    category: JobCategory | None = None
    sort: JobSort = JobSort.NEWEST
    limit: int | None = None

    @classmethod
    def from_params(
        cls,
        search: str | None = None,
        category: str | None = None,
        sort: str | None = None,
        limit: int | None = None,
    ) -> "JobFilter":
        """Build a filter from raw query parameters. Never raises."""
        return cls(
            search_term=optional_text(search),
            category=coerce_category(category),
            sort=coerce_sort(sort),
            limit=limit,
        )


class JobCatalog:
    def create_job(
        self,
        store: Store,
        actor: str | None,
        *,
        title: str | None,
        description: str | None,
        category: str | None,
        location: str | None,
        budget,
        duration: str | None = None,
        requirements: str | None = None,
        contact_info: str | None = None,
    ) -> Job:
        if actor is None:
            raise Unauthenticated("You must be signed in to post a job")
        parsed_category = parse_category(category)
        amount = parse_positive_amount(budget, InvalidBudget)
        fields = {
            "poster_id": actor,
            "title": require_text(title, "Title"),
            "description": require_text(description, "Description"),
            "category": parsed_category.value,
            "location": require_text(location, "Location"),
            "budget": amount,
            "duration": optional_text(duration),
            "requirements": optional_text(requirements),
            "contact_info": optional_text(contact_info),
            "status": JobStatus.ACTIVE.value,
        }
        now = utc_now()
        fields["created_at"] = now
        fields["updated_at"] = now

        try:
            job = store.insert(Job, fields)
        except StoreConflict as exc:
            # Only a poster id with no profile row gets past validation to a constraint.
            logger.warning("Job rejected by store | poster=%s | %s", actor, exc.detail)
            raise InvalidInput("Job could not be saved for this account") from exc
        logger.info("Job created | id=%s | poster=%s | category=%s", job.id, actor, job.category)
        return job

    def list_jobs(self, store: Store, job_filter: JobFilter | None = None) -> list[Job]:
        job_filter = job_filter or JobFilter()
        criteria = [Job.status == JobStatus.ACTIVE.value]

        if job_filter.search_term:
            pattern = f"%{escape_like_pattern(job_filter.search_term)}%"
            criteria.append(
                or_(
                    Job.title.ilike(pattern, escape="\\"),
                    Job.description.ilike(pattern, escape="\\"),
                    Job.location.ilike(pattern, escape="\\"),
                )
            )
        if job_filter.category is not None:
            criteria.append(Job.category == job_filter.category.value)

        return store.query_many(
            Job,
            *criteria,
            order_by=_ORDERINGS[job_filter.sort],
            limit=job_filter.limit,
            options=(joinedload(Job.poster),),
        )

    def list_recent_jobs(self, store: Store) -> list[Job]:
        return self.list_jobs(store, JobFilter(limit=settings.recent_jobs_limit))

    def get_job(self, store: Store, job_id: str) -> Job:
        job = store.query_one(Job, Job.id == job_id, options=(joinedload(Job.poster),))
        if job is None:
            raise NotFound("Job not found")
        return job

    def close_job(self, store: Store, actor: str | None, job_id: str) -> Job:
        if actor is None:
            raise Unauthenticated()
        job = self.get_job(store, job_id)
        if not policy.can_manage_applications(actor, job):
            raise Forbidden("Only the poster can close this job")
        if not policy.can_close_job(actor, job):
            raise JobNotOpen(f"Job is already {job.status}")
        return self._advance(store, job, JobStatus.CLOSED)

    def mark_filled(self, store: Store, job: Job) -> Job | None:
        """Move an active job to filled. Returns None if it was no longer active."""
        return self._advance(store, job, JobStatus.FILLED, strict=False)

    def _advance(self, store: Store, job: Job, target: JobStatus, strict: bool = True) -> Job | None:
        updated = store.update(
            Job,
            job.id,
            {"status": target.value, "updated_at": utc_now()},
            Job.status.in_(transition_sources(target)),
        )
        if updated is None:
            logger.warning("Job %s left active concurrently; %s not applied", job.id, target.value)
            if strict:
                raise JobNotOpen()
            return None
        logger.info("Job %s | id=%s", target.value, job.id)
        return updated


job_catalog = JobCatalog()
