from pydantic import BaseModel, EmailStr, Field
from uuid import UUID
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from sellersync.modules.payments.models import PaymentType, PendingStatus
from sellersync.modules.sellers.models import SellerStatus


class SellerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    initial_balance: Decimal = Field(Decimal("0"), max_digits=12, decimal_places=2)
    notes: Optional[str] = None
    status: SellerStatus = SellerStatus.ACTIVE


class SellerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[EmailStr] = None
    initial_balance: Optional[Decimal] = Field(None, max_digits=12, decimal_places=2)
    notes: Optional[str] = None
    status: Optional[SellerStatus] = None


class SellerOut(BaseModel):
    id: UUID
    name: str
    location: Optional[str] = None
    contact_person: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    initial_balance: Decimal
    notes: Optional[str] = None
    status: SellerStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SellerBalanceOut(SellerOut):
    """Seller with derived totals."""
    total_payments: Decimal
    balance_remaining: Decimal
    pending_amount: Decimal


class SellerPaymentOut(BaseModel):
    id: UUID
    amount: Decimal
    payment_date: date
    payment_type: PaymentType
    reference_number: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class SellerPendingOut(BaseModel):
    id: UUID
    amount: Decimal
    due_date: Optional[date] = None
    description: Optional[str] = None
    status: PendingStatus

    class Config:
        from_attributes = True


class SellerDetailOut(SellerBalanceOut):
    recent_payments: List[SellerPaymentOut]
    pending_details: List[SellerPendingOut]
