from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# "0", "0.5", ".25"
EQUITY_PATTERN = r"^(0|0?\.[0-9]+)$"


# ---------- IN MODELS ----------
class JobNew(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    title: str = Field(min_length=1)
    companyHandle: str = Field(min_length=1, max_length=25)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)


# PATCH: id and companyHandle are not accepted
class JobUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    # may be omitted but not null
    title: str = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[str] = Field(default=None, pattern=EQUITY_PATTERN)


class JobSearch(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    minSalary: Optional[int] = Field(default=None, ge=0)
    hasEquity: Optional[bool] = None
