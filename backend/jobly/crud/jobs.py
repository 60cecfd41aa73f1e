# jobly/crud/jobs.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, NotFoundError
from jobly.crud.companies import COMPANY_COLUMNS
from jobly.crud.filters import Predicate, build_where, contains
from jobly.crud.sql import UpdateField, column_map, pick_updatable, sql_for_partial_update
from jobly.db.query import run_query

logger = logging.getLogger(__name__)

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

UPDATABLE = (
    UpdateField("title", "title", nullable=False),
    UpdateField("salary", "salary"),
    UpdateField("equity", "equity", coerce=lambda v: None if v is None else str(v)),
)
IMMUTABLE = ("id", "companyHandle")

FILTERS = (
    Predicate("minSalary", "j.salary >= {}"),
    # equity is stored as text; only an explicit True filters
    Predicate("hasEquity", "CAST(j.equity AS NUMERIC) > 0", when=lambda v: v is True),
    Predicate("title", "lower(j.title) LIKE lower({})", bind=contains),
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Insert a job and return {id, title, salary, equity, companyHandle}.

    Raises BadRequestError if companyHandle names no company.
    """
    company_handle = data["companyHandle"]
    try:
        rows = run_query(
            db,
            f"""INSERT INTO jobs (title, salary, equity, company_handle)
                VALUES ($1, $2, $3, $4)
                RETURNING {JOB_COLUMNS}""",
            [data["title"], data.get("salary"), data.get("equity"), company_handle],
        )
        db.commit()
    except IntegrityError:
        db.rollback()
        owner = run_query(db, "SELECT handle FROM companies WHERE handle = $1", [company_handle])
        if not owner:
            raise BadRequestError(f"No company: {company_handle}")
        raise BadRequestError("Invalid job data")

    job = rows[0]
    logger.info("[jobs] created id=%s company=%s", job["id"], company_handle)
    return job


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """List jobs ordered by title, each with its company's name.

    filters (all optional):
      minSalary: int, jobs paying at least this much
      hasEquity: bool, True keeps jobs with non-zero equity; anything else is ignored
      title: str, case-insensitive substring of the title
    """
    where = build_where(filters, FILTERS)
    return run_query(
        db,
        f"""SELECT j.id,
                   j.title,
                   j.salary,
                   j.equity,
                   j.company_handle AS "companyHandle",
                   c.name AS "companyName"
            FROM jobs AS j
            LEFT JOIN companies AS c ON c.handle = j.company_handle
            {where.sql}
            ORDER BY j.title""",
        where.values,
    )


def get(db: Session, job_id: int) -> Dict[str, Any]:
    """Return {id, title, salary, equity, company} where company is the full record."""
    rows = run_query(db, f"SELECT {JOB_COLUMNS} FROM jobs WHERE id = $1", [job_id])
    if not rows:
        raise NotFoundError(f"No job: {job_id}")

    job = rows[0]
    company_handle = job.pop("companyHandle")
    companies = run_query(
        db,
        f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1",
        [company_handle],
    )
    if companies:
        job["company"] = companies[0]
    return job


def update(db: Session, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Partial update of {title, salary, equity}; id and companyHandle are fixed."""
    fields = pick_updatable(data, UPDATABLE, immutable=IMMUTABLE)
    upd = sql_for_partial_update(fields, column_map(UPDATABLE))

    try:
        rows = run_query(
            db,
            f"""UPDATE jobs
                SET {upd.set_cols}
                WHERE id = ${upd.next_param}
                RETURNING {JOB_COLUMNS}""",
            [*upd.values, job_id],
        )
    except IntegrityError:
        # e.g. salary below zero from a caller that skipped the schema
        db.rollback()
        raise BadRequestError("Invalid job data")
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info("[jobs] updated id=%s fields=%s", job_id, list(fields))
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    rows = run_query(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", [job_id])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No job: {job_id}")

    db.commit()
    logger.info("[jobs] removed id=%s", job_id)
