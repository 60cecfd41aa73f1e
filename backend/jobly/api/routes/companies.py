# jobly/api/routes/companies.py
from typing import Any

from fastapi import APIRouter, Body, Depends, Request, status
from sqlalchemy.orm import Session

from jobly.crud import companies as crud
from jobly.db.session import get_db
from jobly.schemas.validation import ensure_valid

router = APIRouter(prefix="/companies", tags=["companies"])


# POST /companies  { company } => { company }
@router.post("", response_model=dict, status_code=status.HTTP_201_CREATED)
def create_company(payload: Any = Body(default=None), db: Session = Depends(get_db)):
    data = ensure_valid(payload, "companyNew")
    return {"company": crud.create(db, data)}


# GET /companies?minEmployees=&maxEmployees=&name=
@router.get("", response_model=dict)
def list_companies(request: Request, db: Session = Depends(get_db)):
    filters = ensure_valid(dict(request.query_params), "companySearch")
    return {"companies": crud.find_all(db, filters)}


# GET /companies/{handle}  => { company } with jobs
@router.get("/{handle}", response_model=dict)
def get_company(handle: str, db: Session = Depends(get_db)):
    return {"company": crud.get(db, handle)}


# PATCH /companies/{handle}  { name?, description?, numEmployees?, logoUrl? }
@router.patch("/{handle}", response_model=dict)
def update_company(handle: str, payload: Any = Body(default=None), db: Session = Depends(get_db)):
    data = ensure_valid(payload, "companyUpdate")
    return {"company": crud.update(db, handle, data)}


@router.delete("/{handle}", response_model=dict)
def delete_company(handle: str, db: Session = Depends(get_db)):
    crud.remove(db, handle)
    return {"deleted": handle}
