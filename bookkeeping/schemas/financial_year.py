"""
Pydantic schemas for financial years.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator


class FinancialYearCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    start_date: date
    end_date: date
    is_active: bool = False

    @model_validator(mode="after")
    def end_not_before_start(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class FinancialYearResponse(BaseModel):
    id: int
    name: str
    start_date: date
    end_date: date
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
