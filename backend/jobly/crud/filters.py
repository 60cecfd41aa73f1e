# jobly/crud/filters.py
"""
Optional WHERE-clause predicates for list queries.

Each entity declares an ordered tuple of ``Predicate`` descriptors. Every
descriptor checks whether its criterion is present, renders a fragment,
and may bind one value. ``build_where`` walks them once, in declaration
order, so placeholder numbering is fixed for a given set of criteria.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Sequence


def _present(v: Any) -> bool:
    return v is not None


def _same(v: Any) -> Any:
    return v


def contains(v: Any) -> str:
    """Wrap a search term for a LIKE substring match."""
    return f"%{v}%"


@dataclass(frozen=True)
class Predicate:
    key: str
    # "{}" is replaced by the placeholder; no "{}" means no bound value
    template: str
    bind: Callable[[Any], Any] = _same
    when: Callable[[Any], bool] = _present

    @property
    def binds_value(self) -> bool:
        return "{}" in self.template


@dataclass
class WhereClause:
    fragments: List[str] = field(default_factory=list)
    values: List[Any] = field(default_factory=list)

    @property
    def sql(self) -> str:
        if not self.fragments:
            return ""
        return " WHERE " + " AND ".join(self.fragments)


def build_where(
    filters: Optional[Mapping[str, Any]],
    predicates: Sequence[Predicate],
    start: int = 1,
) -> WhereClause:
    """Render the predicates whose criterion is present in ``filters``.

    ``start`` is the number of the first placeholder, for statements that
    already bind earlier parameters.
    """
    filters = filters or {}
    where = WhereClause()

    for p in predicates:
        raw = filters.get(p.key)
        if not p.when(raw):
            continue
        if p.binds_value:
            where.values.append(p.bind(raw))
            where.fragments.append(p.template.format(f"${start + len(where.values) - 1}"))
        else:
            where.fragments.append(p.template)

    return where
