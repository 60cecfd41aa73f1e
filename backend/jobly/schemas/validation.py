"""
Validation gate in front of the models.

Request payloads (JSON bodies and query strings) are checked against the
declarative schemas registered in ``SCHEMAS`` before any model call.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from jobly.core.errors import BadRequestError
from jobly.schemas.companies import CompanyNew, CompanySearch, CompanyUpdate
from jobly.schemas.jobs import JobNew, JobSearch, JobUpdate

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "companyNew": CompanyNew,
    "companyUpdate": CompanyUpdate,
    "companySearch": CompanySearch,
    "jobNew": JobNew,
    "jobUpdate": JobUpdate,
    "jobSearch": JobSearch,
}


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    # only the keys the caller sent
    value: Optional[Dict[str, Any]] = None


def _format_error(err: dict) -> str:
    path = ".".join(str(p) for p in ("instance", *err.get("loc", ())))
    return f"{path}: {err.get('msg', 'invalid')}"


def _resolve(schema: Union[str, Type[BaseModel]]) -> Type[BaseModel]:
    if isinstance(schema, str):
        try:
            return SCHEMAS[schema]
        except KeyError:
            raise KeyError(f"Unknown schema: {schema}") from None
    return schema


def validate(payload: Any, schema: Union[str, Type[BaseModel]]) -> ValidationResult:
    model = _resolve(schema)
    if not isinstance(payload, dict):
        return ValidationResult(valid=False, errors=["instance: must be an object"])
    try:
        obj = model.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(valid=False, errors=[_format_error(x) for x in e.errors()])
    return ValidationResult(valid=True, value=obj.model_dump(exclude_unset=True))


def ensure_valid(payload: Any, schema: Union[str, Type[BaseModel]]) -> Dict[str, Any]:
    """Return the validated payload or raise BadRequestError with every message."""
    result = validate(payload, schema)
    if not result.valid:
        raise BadRequestError(result.errors)
    return result.value or {}
