# jobly/api/routes/jobs.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Request, status
from sqlalchemy.orm import Session

from jobly.crud import jobs as crud
from jobly.db.session import get_db
from jobly.schemas.validation import ensure_valid

router = APIRouter(prefix="/jobs", tags=["jobs"])

# largest id the storage integer type can hold
MAX_JOB_ID = 2**63 - 1


# POST /jobs  { title, salary?, equity?, companyHandle } => { job }
@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_job(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    data = ensure_valid(payload, "jobNew")
    return {"job": crud.create(db, data)}


# GET /jobs?minSalary=&hasEquity=&title=
@router.get("", response_model=dict)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    filters = ensure_valid(dict(request.query_params), "jobSearch")
    return {"jobs": crud.find_all(db, filters)}


# GET /jobs/{id}  => { job } with its company
@router.get("/{job_id}", response_model=dict)
def get_job(job_id: int = Path(le=MAX_JOB_ID), db: Session = Depends(get_db)):
    return {"job": crud.get(db, job_id)}


# PATCH /jobs/{id}  { title?, salary?, equity? }
@router.patch("/{job_id}", response_model=dict)
def update_job(job_id: int = Path(le=MAX_JOB_ID), payload: Any = Body(default=None), db: Session = Depends(get_db)):
    data = ensure_valid(payload, "jobUpdate")
    return {"job": crud.update(db, job_id, data)}


@router.delete("/{job_id}", response_model=dict)
def delete_job(job_id: int = Path(le=MAX_JOB_ID), db: Session = Depends(get_db)):
    crud.remove(db, job_id)
    return {"deleted": job_id}
