from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from sellersync.core.config import settings
from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.stock.service import StockService
from sellersync.modules.stock.schemas import (
    StockItemCreate, StockItemUpdate, StockItemOut, StockItemList, StockSummaryResponse
)
from sellersync.modules.stock.state_machine import StockStatus

stock_router = APIRouter(tags=["Stock"])

@stock_router.post("/", response_model=StockItemOut, status_code=status.HTTP_201_CREATED)
def create_stock_item(
    item: StockItemCreate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return StockService(db).create_stock_item(item)

@stock_router.get("/", response_model=StockItemList)
def list_stock_items(
    seller_id: Optional[UUID] = Query(None),
    status: Optional[StockStatus] = Query(None),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return StockService(db).list_stock_items(seller_id, status, limit, offset)

@stock_router.get("/summary", response_model=StockSummaryResponse)
def stock_summary(
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return BalanceAggregator(db).stock_summary()

@stock_router.get("/{item_id}", response_model=StockItemOut)
def get_stock_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return StockService(db).get_stock_item(item_id)

@stock_router.patch("/{item_id}", response_model=StockItemOut)
def update_stock_item(
    item_id: UUID,
    update: StockItemUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return StockService(db).update_stock_item(item_id, update)

@stock_router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stock_item(
    item_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    StockService(db).delete_stock_item(item_id)
