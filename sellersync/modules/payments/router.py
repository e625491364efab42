from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.auth.schemas import AuthContext
from sellersync.modules.payments.models import PaymentType
from sellersync.modules.payments.service import PaymentService, PendingAmountService
from sellersync.modules.payments.schemas import (
    PaymentCreate, PaymentUpdate, PaymentOut,
    PendingAmountCreate, PendingAmountUpdate, PendingAmountOut,
    GlobalSummaryResponse
)
from sellersync.modules.reports.services.balance import BalanceAggregator

payment_router = APIRouter(tags=["Payments"])

# Pending amounts: declared before /{payment_id} so the path is not captured

@payment_router.get("/pending", response_model=List[PendingAmountOut])
def list_pending_amounts(
    seller_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return PendingAmountService(db).list_pending(seller_id)

@payment_router.post("/pending", response_model=PendingAmountOut, status_code=status.HTTP_201_CREATED)
def create_pending_amount(
    pending: PendingAmountCreate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return PendingAmountService(db).create_pending(pending)

@payment_router.patch("/pending/{pending_id}", response_model=PendingAmountOut)
def update_pending_amount(
    pending_id: UUID,
    update: PendingAmountUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return PendingAmountService(db).update_pending(pending_id, update)

@payment_router.delete("/pending/{pending_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pending_amount(
    pending_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    PendingAmountService(db).delete_pending(pending_id)

@payment_router.get("/summary", response_model=GlobalSummaryResponse)
def payments_summary(
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    """Business-wide totals, cash in hand and the monthly payment trend."""
    return BalanceAggregator(db).global_summary()

# Payments

@payment_router.post("/", response_model=PaymentOut, status_code=status.HTTP_201_CREATED)
def create_payment(
    payment: PaymentCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(AuthDependencies.require_manager())
):
    return PaymentService(db).create_payment(payment, auth_context.user_id)

@payment_router.get("/", response_model=List[PaymentOut])
def list_payments(
    seller_id: Optional[UUID] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    payment_type: Optional[PaymentType] = Query(None),
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return PaymentService(db).list_payments(seller_id, from_date, to_date, payment_type)

@payment_router.get("/{payment_id}", response_model=PaymentOut)
def get_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return PaymentService(db).get_payment(payment_id)

@payment_router.patch("/{payment_id}", response_model=PaymentOut)
def update_payment(
    payment_id: UUID,
    update: PaymentUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return PaymentService(db).update_payment(payment_id, update)

@payment_router.delete("/{payment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_payment(
    payment_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    PaymentService(db).delete_payment(payment_id)
