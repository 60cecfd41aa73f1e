"""
Run positional-parameter SQL through a SQLAlchemy session.

Statements are written with ``$1, $2, ...`` placeholders and an ordered
list of values, the way the builders in ``jobly.crud`` produce them.
Before execution each ``$n`` is rewritten to the named bind ``:p<n>`` that
``sqlalchemy.text`` understands, so the same statement runs on SQLite and
PostgreSQL.
"""
import re
from typing import Any, Dict, List, Sequence

from sqlalchemy import text
from sqlalchemy.orm import Session

_POSITIONAL = re.compile(r"\$(\d+)")


def to_named(sql: str, values: Sequence[Any]) -> tuple[str, Dict[str, Any]]:
    """Rewrite ``$n`` placeholders to ``:pn`` and build the bind dict.

    Raises ValueError when a placeholder points past the end of ``values``.
    """
    def _sub(m: re.Match) -> str:
        idx = int(m.group(1))
        if idx < 1 or idx > len(values):
            raise ValueError(f"placeholder ${idx} has no value (got {len(values)})")
        return f":p{idx}"

    named_sql = _POSITIONAL.sub(_sub, sql)
    params = {f"p{i}": v for i, v in enumerate(values, start=1)}
    return named_sql, params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """Execute ``sql`` and return every row as a plain dict.

    Statements that return no rows (no RETURNING clause) give ``[]``.
    """
    named_sql, params = to_named(sql, values)
    result = db.execute(text(named_sql), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
