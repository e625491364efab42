from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.auth.schemas import AuthContext
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.sales.models import SalePaymentMethod
from sellersync.modules.sales.service import SaleService
from sellersync.modules.sales.schemas import (
    SaleCreate, SaleUpdate, SaleOut, SaleDetailOut, SalesSummaryResponse
)

sale_router = APIRouter(tags=["Sales"])

@sale_router.post("/", response_model=SaleOut, status_code=status.HTTP_201_CREATED)
def record_sale(
    sale: SaleCreate,
    db: Session = Depends(get_db),
    auth_context: AuthContext = Depends(AuthDependencies.require_manager())
):
    """Record a sale; the stock item must be in stock."""
    return SaleService(db).record_sale(sale, auth_context.user_id)

@sale_router.get("/", response_model=List[SaleDetailOut])
def list_sales(
    seller_id: Optional[UUID] = Query(None),
    from_date: Optional[date] = Query(None),
    to_date: Optional[date] = Query(None),
    payment_method: Optional[SalePaymentMethod] = Query(None),
    exhibition_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return SaleService(db).list_sales(seller_id, from_date, to_date, payment_method, exhibition_id)

@sale_router.get("/summary", response_model=SalesSummaryResponse)
def sales_summary(
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return BalanceAggregator(db).sales_summary()

@sale_router.get("/{sale_id}", response_model=SaleDetailOut)
def get_sale(
    sale_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return SaleService(db).get_sale(sale_id)

@sale_router.patch("/{sale_id}", response_model=SaleDetailOut)
def update_sale(
    sale_id: UUID,
    update: SaleUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return SaleService(db).update_sale(sale_id, update)

@sale_router.delete("/{sale_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_sale(
    sale_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    """Delete a sale and return its stock item to stock."""
    SaleService(db).delete_sale(sale_id)
