from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from sellersync.modules.payments.models import PaymentType, PendingStatus


class PaymentCreate(BaseModel):
    seller_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    payment_date: date
    payment_type: PaymentType = PaymentType.CASH
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    image_path: Optional[str] = Field(None, max_length=500)


class PaymentUpdate(BaseModel):
    """Patch for a payment. ``clear_image`` drops the stored receipt reference."""
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    payment_date: Optional[date] = None
    payment_type: Optional[PaymentType] = None
    reference_number: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = None
    image_path: Optional[str] = Field(None, max_length=500)
    clear_image: bool = False


class PaymentOut(BaseModel):
    id: UUID
    seller_id: UUID
    seller_name: Optional[str] = None
    amount: Decimal
    payment_date: date
    payment_type: PaymentType
    reference_number: Optional[str] = None
    notes: Optional[str] = None
    image_path: Optional[str] = None
    recorded_by: Optional[UUID] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PendingAmountCreate(BaseModel):
    seller_id: UUID
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    due_date: Optional[date] = None
    description: Optional[str] = None
    status: PendingStatus = PendingStatus.PENDING


class PendingAmountUpdate(BaseModel):
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    due_date: Optional[date] = None
    description: Optional[str] = None
    status: Optional[PendingStatus] = None


class PendingAmountOut(BaseModel):
    id: UUID
    seller_id: UUID
    seller_name: Optional[str] = None
    amount: Decimal
    due_date: Optional[date] = None
    description: Optional[str] = None
    status: PendingStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SellerBalanceRow(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    initial_balance: Decimal
    total_payments: Decimal
    balance_remaining: Decimal
    pending_amount: Decimal


class MonthlyTrendItem(BaseModel):
    month: str
    total: Decimal


class GlobalSummaryResponse(BaseModel):
    total_payments: Decimal
    total_initial_balance: Decimal
    cash_in_hand: Decimal
    total_pending: Decimal
    by_seller: List[SellerBalanceRow]
    monthly_trend: List[MonthlyTrendItem]
