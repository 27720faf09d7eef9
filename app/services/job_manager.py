import uuid
from dataclasses import dataclass
from typing import Dict, Any, Optional

from app.schemas.jobs import JobStatus
from core.logging_manager import setup_loggers
from .job_store import JobStore, DeckStore
from .json_job_store import JsonJobStore, JsonDeckStore

success_logger, fail_logger = setup_loggers(logger_name="job_manager")


@dataclass
class Stores:
    jobs: JobStore
    decks: DeckStore


def build_stores(store_config: Dict[str, Any]) -> Stores:
    """
    Construct the job and deck stores once at startup.
    store_config is what config.config_loader.load_store_config() returns.
    """
    backend = store_config.get("backend", "json")

    if backend == "sqlite":
        # Lazy import: only the sqlite backend needs SQLAlchemy loaded
        from app.databases.jobs import make_session_factory
        from .sqlalchemy_job_store import SQLAlchemyJobStore, SQLAlchemyDeckStore

        session_factory = make_session_factory(store_config["db_path"])
        stores = Stores(
            jobs=SQLAlchemyJobStore(session_factory=session_factory),
            decks=SQLAlchemyDeckStore(session_factory=session_factory),
        )
    else:
        stores = Stores(
            jobs=JsonJobStore(store_config["jobs_path"]),
            decks=JsonDeckStore(store_config["decks_path"]),
        )

    success_logger.info(f"Stores ready ({backend} backend)")
    return stores


def create_job(stores: Stores, job_id: Optional[str] = None, fields: Optional[Dict[str, Any]] = None):
    """
    Queue a new job. `fields` is opaque job data (options, sourceFilename, ...)
    stored as given; it may override the default status and progress.
    """
    job = {
        "jobId": job_id or uuid.uuid4().hex,
        "status": JobStatus.QUEUED.value,
        "progress": 0,
    }
    job.update({k: v for k, v in (fields or {}).items() if k != "jobId"})
    return stores.jobs.create(job)


def start_job(stores: Stores, job_id: str, stage: Optional[str] = None, progress: Optional[float] = None):
    patch = {"status": JobStatus.PROCESSING.value}
    if stage is not None:
        patch["stage"] = stage
    if progress is not None:
        patch["progress"] = progress
    return stores.jobs.update(job_id, patch)


def complete_job(stores: Stores, job_id: str, deck: Dict[str, Any]):
    """
    Persist the generated deck, then point the job at it.
    Returns None (and saves nothing) if the job doesn't exist.
    """
    if stores.jobs.get(job_id) is None:
        fail_logger.error(f"Cannot complete unknown job {job_id}")
        return None

    saved = stores.decks.save(deck)
    return stores.jobs.update(job_id, {
        "status": JobStatus.COMPLETED.value,
        "progress": 1,
        "deckId": saved["id"],
        "error": None,
    })


def fail_job(stores: Stores, job_id: str, error: str):
    fail_logger.error(f"Job {job_id} failed: {error}")
    return stores.jobs.update(job_id, {
        "status": JobStatus.FAILED.value,
        "progress": 1,
        "error": error,
    })
