# jobly/crud/sql.py
"""
Helpers for building the SET part of a partial UPDATE.

A partial update only touches the fields the caller supplied. Given

    {"firstName": "Aliya", "age": 32}  and  {"firstName": "first_name"}

``sql_for_partial_update`` returns

    fragments = ['"first_name"=$1', '"age"=$2']
    values    = ['Aliya', 32]

Placeholders are 1-based and follow the order of the input keys. Callers
append their own parameters (usually the row key for the WHERE clause)
starting at ``next_param``.

Models never hand raw request bodies to the builder. ``pick_updatable``
first filters the body through an explicit allow-list of ``UpdateField``
descriptors, so column names in the SQL only ever come from code.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from jobly.core.errors import BadRequestError


@dataclass(frozen=True)
class PartialUpdate:
    fragments: List[str]
    values: List[Any]

    @property
    def set_cols(self) -> str:
        return ", ".join(self.fragments)

    @property
    def next_param(self) -> int:
        return len(self.values) + 1


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """Build ``"col"=$n`` fragments and their values.

    Args:
        data_to_update: field name -> new value; must not be empty
        js_to_sql: field name -> column name; unmapped fields keep their name

    Raises:
        BadRequestError: if ``data_to_update`` is empty
    """
    if not data_to_update:
        raise BadRequestError("No data")

    js_to_sql = js_to_sql or {}
    fragments: List[str] = []
    values: List[Any] = []
    for key, value in data_to_update.items():
        values.append(value)
        fragments.append(f'"{js_to_sql.get(key) or key}"=${len(values)}')

    return PartialUpdate(fragments=fragments, values=values)


def _identity(v: Any) -> Any:
    return v


@dataclass(frozen=True)
class UpdateField:
    """One mutable field: public name, storage column, value coercion."""

    name: str
    column: str
    coerce: Callable[[Any], Any] = _identity
    # False for NOT NULL columns
    nullable: bool = True


def column_map(fields: Iterable[UpdateField]) -> Dict[str, str]:
    return {f.name: f.column for f in fields}


def pick_updatable(
    data: Mapping[str, Any],
    fields: Iterable[UpdateField],
    immutable: Iterable[str] = (),
) -> Dict[str, Any]:
    """Keep only allow-listed fields (input order), coercing each value.

    Immutable or unknown keys, and null for a NOT NULL column, are rejected.
    """
    allowed = {f.name: f for f in fields}
    frozen = set(immutable)

    picked: Dict[str, Any] = {}
    for key, value in data.items():
        if key in frozen:
            raise BadRequestError(f"Field cannot be changed: {key}")
        field = allowed.get(key)
        if field is None:
            raise BadRequestError(f"Unknown field: {key}")
        if value is None and not field.nullable:
            raise BadRequestError(f"Field cannot be null: {key}")
        picked[key] = field.coerce(value)
    return picked
