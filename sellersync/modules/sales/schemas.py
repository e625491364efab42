from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from sellersync.modules.sales.models import SalePaymentMethod


class SaleCreate(BaseModel):
    stock_item_id: UUID
    selling_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    payment_method: SalePaymentMethod = SalePaymentMethod.CASH
    sale_date: date
    notes: Optional[str] = None
    exhibition_id: Optional[UUID] = None


class SaleUpdate(BaseModel):
    """Patch for a recorded sale. The sold stock item cannot be swapped."""
    selling_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)
    payment_method: Optional[SalePaymentMethod] = None
    sale_date: Optional[date] = None
    notes: Optional[str] = None
    exhibition_id: Optional[UUID] = None


class SaleOut(BaseModel):
    id: UUID
    stock_item_id: UUID
    selling_price: Decimal
    payment_method: SalePaymentMethod
    sale_date: date
    notes: Optional[str] = None
    exhibition_id: Optional[UUID] = None
    recorded_by: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SaleDetailOut(SaleOut):
    """Sale joined with its stock item and seller."""
    item_name: Optional[str] = None
    cost_price: Optional[Decimal] = None
    seller_id: Optional[UUID] = None
    seller_name: Optional[str] = None


class SalesByMethodItem(BaseModel):
    payment_method: str
    total: Decimal
    count: int


class SalesSummaryResponse(BaseModel):
    total_sales: Decimal
    total_cost: Decimal
    total_payments: Decimal
    rolling_cash: Decimal
    profit: Decimal
    sales_by_method: List[SalesByMethodItem]
