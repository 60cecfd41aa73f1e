# jobly/crud/companies.py
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.errors import BadRequestError, ConflictError, NotFoundError
from jobly.crud.filters import Predicate, build_where, contains
from jobly.crud.sql import UpdateField, column_map, pick_updatable, sql_for_partial_update
from jobly.db.query import run_query

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    'handle, name, description, '
    'num_employees AS "numEmployees", logo_url AS "logoUrl"'
)

UPDATABLE = (
    UpdateField("name", "name", nullable=False),
    UpdateField("description", "description", nullable=False),
    UpdateField("numEmployees", "num_employees"),
    UpdateField("logoUrl", "logo_url"),
)
IMMUTABLE = ("handle",)

FILTERS = (
    Predicate("minEmployees", "num_employees >= {}"),
    Predicate("maxEmployees", "num_employees <= {}"),
    Predicate("name", "lower(name) LIKE lower({})", bind=contains, when=bool),
)


def create(db: Session, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Insert a company and return it.

    data: {handle, name, description, numEmployees?, logoUrl?}
    Raises ConflictError if the handle is taken.
    """
    handle = data["handle"]

    dup = run_query(db, "SELECT handle FROM companies WHERE handle = $1", [handle])
    if dup:
        raise ConflictError(f"Duplicate company: {handle}")

    # The lookup above and this insert are not atomic; the primary key is
    # what finally guarantees uniqueness.
    try:
        rows = run_query(
            db,
            f"""INSERT INTO companies
                   (handle, name, description, num_employees, logo_url)
                VALUES ($1, $2, $3, $4, $5)
                RETURNING {COMPANY_COLUMNS}""",
            [
                handle,
                data["name"],
                data["description"],
                data.get("numEmployees"),
                data.get("logoUrl"),
            ],
        )
        db.commit()
    except IntegrityError:
        # handle taken by a concurrent create, or name already in use
        db.rollback()
        raise ConflictError("Duplicate company")

    logger.info("[companies] created handle=%s", handle)
    return rows[0]


def find_all(db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
    """List companies ordered by name.

    filters (all optional):
      minEmployees: int, companies with at least this many employees
      maxEmployees: int, companies with at most this many employees
      name: str, case-insensitive substring of the name
    """
    filters = filters or {}
    lo, hi = filters.get("minEmployees"), filters.get("maxEmployees")
    if lo is not None and hi is not None and lo > hi:
        raise BadRequestError("Minimum number of employees must not be greater than maximum")

    where = build_where(filters, FILTERS)
    return run_query(
        db,
        f"SELECT {COMPANY_COLUMNS} FROM companies{where.sql} ORDER BY name",
        where.values,
    )


def get(db: Session, handle: str) -> Dict[str, Any]:
    """Return one company with its jobs: [{id, title, salary, equity}, ...]."""
    rows = run_query(db, f"SELECT {COMPANY_COLUMNS} FROM companies WHERE handle = $1", [handle])
    if not rows:
        raise NotFoundError(f"No company: {handle}")

    company = rows[0]
    company["jobs"] = run_query(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        [handle],
    )
    return company


def update(db: Session, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    """Partial update of {name, description, numEmployees, logoUrl}."""
    fields = pick_updatable(data, UPDATABLE, immutable=IMMUTABLE)
    upd = sql_for_partial_update(fields, column_map(UPDATABLE))

    try:
        rows = run_query(
            db,
            f"""UPDATE companies
                SET {upd.set_cols}
                WHERE handle = ${upd.next_param}
                RETURNING {COMPANY_COLUMNS}""",
            [*upd.values, handle],
        )
    except IntegrityError:
        # companies.name is UNIQUE
        db.rollback()
        raise ConflictError(f"Company name already in use: {fields.get('name')}")
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info("[companies] updated handle=%s fields=%s", handle, list(fields))
    return rows[0]


def remove(db: Session, handle: str) -> None:
    rows = run_query(db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", [handle])
    if not rows:
        db.rollback()
        raise NotFoundError(f"No company: {handle}")

    db.commit()
    logger.info("[companies] removed handle=%s", handle)
