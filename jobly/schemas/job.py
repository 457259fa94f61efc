from decimal import Decimal, InvalidOperation
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional, Union


def _check_equity(v: Union[str, int, float, None]) -> Optional[str]:
    """Normalize equity to a decimal string within [0, 1]."""
    if v is None:
        return None
    if isinstance(v, bool):
        raise ValueError("equity must be a decimal string")
    text = str(v).strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise ValueError("equity must be a decimal string")
    if not amount.is_finite() or amount < 0 or amount > 1:
        raise ValueError("equity must be between 0 and 1")
    return text


class JobCreateRequest(BaseModel):
    """Schema for creating a new job"""
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = None
    company_handle: str = Field(..., alias="companyHandle", min_length=1, max_length=25)

    @field_validator("equity", mode="before")
    @classmethod
    def validate_equity(cls, v):
        return _check_equity(v)


class JobUpdateRequest(BaseModel):
    """
    Schema for a partial job update.

    id and companyHandle are not accepted; only fields present in the
    request body are applied.
    """
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        if v is None:
            raise ValueError("title cannot be null")
        return v

    @field_validator("equity", mode="before")
    @classmethod
    def validate_equity(cls, v):
        return _check_equity(v)


class JobResponse(BaseModel):
    """Schema for a job record"""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[str] = None
    company_handle: str = Field(..., alias="companyHandle")


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]


class JobDeletedResponse(BaseModel):
    deleted: int
