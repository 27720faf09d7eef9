from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException

from app.schemas.jobs import JobSchema, JobCreateSchema
from app.services.job_manager import Stores, create_job
from app.services.job_store import ConflictError
from core.logging_manager import setup_loggers
from .dependencies import get_stores

success_logger, fail_logger = setup_loggers(logger_name="app_router_jobs")

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/", response_model=List[JobSchema], response_model_exclude_unset=True)
def list_jobs(stores: Stores = Depends(get_stores)):
    """
    Return all jobs, newest first.
    """
    return stores.jobs.list()


@router.post("/", response_model=JobSchema, response_model_exclude_unset=True, status_code=201)
def post_job(payload: JobCreateSchema, stores: Stores = Depends(get_stores)):
    fields = payload.model_dump(by_alias=True, exclude_none=True)
    job_id = fields.pop("jobId", None)
    try:
        return create_job(stores, job_id=job_id, fields=fields)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/{job_id}", response_model=JobSchema, response_model_exclude_unset=True)
def get_job(job_id: str, stores: Stores = Depends(get_stores)):
    job = stores.jobs.get(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job


@router.patch("/{job_id}", response_model=JobSchema, response_model_exclude_unset=True)
def patch_job(job_id: str, patch: Dict[str, Any] = Body(...), stores: Stores = Depends(get_stores)):
    """
    Shallow-merge the body into the job. No transition checks are made here.
    """
    job = stores.jobs.update(job_id, patch)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job
