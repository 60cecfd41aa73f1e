from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# ---------- IN MODELS ----------
class CompanyNew(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None


# PATCH: every field optional, handle is not one of them
class CompanyUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    # may be omitted but not null (NOT NULL columns)
    name: str = Field(default=None, min_length=1)
    description: str = None
    numEmployees: Optional[int] = Field(default=None, ge=0)
    logoUrl: Optional[str] = None


# Query string filters (lax, so "10" -> 10)
class CompanySearch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    minEmployees: Optional[int] = Field(default=None, ge=0)
    maxEmployees: Optional[int] = Field(default=None, ge=0)
    name: Optional[str] = Field(default=None, min_length=1)
