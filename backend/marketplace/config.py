from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_dir: Path = Path.home() / ".local-jobs-marketplace"
    session_ttl_seconds: int = 24 * 60 * 60
    # Summary views (home page) show only the newest N active jobs.
    recent_jobs_limit: int = 6
    max_list_limit: int = 100
    # Acceptance side effects. Both off by default: accepting one applicant
    # leaves the job open and sibling applications pending.
    fill_job_on_accept: bool = False
    reject_pending_on_accept: bool = False
    cors_origins: list[str] = [
        "http://127.0.0.1:5173",
        "http://localhost:5173",
    ]
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def db_path(self) -> Path:
        return self.data_dir / "marketplace.sqlite"

    model_config = {"env_prefix": "MARKET_"}


settings = Settings()
