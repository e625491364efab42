from pydantic import BaseModel, Field
from uuid import UUID
from typing import Optional, List
from datetime import datetime
from decimal import Decimal

from sellersync.modules.stock.state_machine import StockStatus


class StockItemCreate(BaseModel):
    seller_id: UUID
    item_name: str = Field(..., min_length=1, max_length=255)
    cost_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class StockItemUpdate(BaseModel):
    """Patch: only item_name and cost_price are editable, never status."""
    item_name: Optional[str] = Field(None, min_length=1, max_length=255)
    cost_price: Optional[Decimal] = Field(None, ge=0, max_digits=12, decimal_places=2)


class StockItemOut(BaseModel):
    id: UUID
    seller_id: UUID
    seller_name: Optional[str] = None
    item_name: str
    cost_price: Decimal
    status: StockStatus
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StockItemList(BaseModel):
    items: List[StockItemOut]
    total: int
    limit: int
    offset: int


class StockCountItem(BaseModel):
    status: str
    count: int


class SellerStockItem(BaseModel):
    id: UUID
    name: str
    items_in_stock: int
    stock_value: Decimal
    items_sold: int


class StockSummaryResponse(BaseModel):
    total_stock_value: Decimal
    stock_count: List[StockCountItem]
    seller_summary: List[SellerStockItem]
