from marketplace.models.profile import Profile
from marketplace.models.job import Job
from marketplace.models.application import Application

__all__ = ["Profile", "Job", "Application"]
