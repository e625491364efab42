from pydantic import BaseModel, Field, model_validator
from uuid import UUID
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from sellersync.modules.exhibitions.models import ExhibitionStatus
from sellersync.modules.sales.schemas import SaleDetailOut


class ExhibitionCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    status: ExhibitionStatus = ExhibitionStatus.UPCOMING

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class ExhibitionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    status: Optional[ExhibitionStatus] = None


class ExhibitionOut(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    notes: Optional[str] = None
    status: ExhibitionStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ExhibitionStatsOut(ExhibitionOut):
    sales_count: int
    total_sales: Decimal
    total_profit: Decimal


class ExhibitionDetailOut(ExhibitionStatsOut):
    sales: List[SaleDetailOut]


class ExhibitionSummaryResponse(BaseModel):
    total_exhibitions: int
    active_exhibitions: int
    upcoming_exhibitions: int
    total_sales: Decimal
    total_profit: Decimal
