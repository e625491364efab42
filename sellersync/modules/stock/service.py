from typing import Dict, Any, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session, selectinload

from sellersync.common.exceptions import NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.sellers.models import Seller
from sellersync.modules.stock.lifecycle import InventoryLifecycleManager
from sellersync.modules.stock.models import StockItem
from sellersync.modules.stock.schemas import StockItemCreate, StockItemUpdate
from sellersync.modules.stock.state_machine import StockStatus

logger = logging.getLogger(__name__)


class StockService:
    """Stock item CRUD. Status changes are delegated to the lifecycle manager."""

    def __init__(self, db: Session):
        self.db = db

    def create_stock_item(self, item_data: StockItemCreate) -> StockItem:
        """
        Add a stock item for an existing seller. New items start in_stock.

        Raises:
            NotFoundError: if the seller does not exist
        """
        if not self.db.get(Seller, item_data.seller_id):
            raise NotFoundError("Seller", item_data.seller_id)

        item = StockItem(
            seller_id=item_data.seller_id,
            item_name=item_data.item_name,
            cost_price=item_data.cost_price,
        )
        with committing(self.db, "adding stock item"):
            self.db.add(item)
        self.db.refresh(item)
        logger.info(f"Stock item {item.id} added for seller {item.seller_id}")
        return item

    def list_stock_items(
        self,
        seller_id: Optional[UUID] = None,
        status: Optional[StockStatus] = None,
        limit: int = 100,
        offset: int = 0
    ) -> Dict[str, Any]:
        """List stock items, newest first, with optional seller/status filters."""
        query = self.db.query(StockItem).options(selectinload(StockItem.seller))
        if seller_id:
            query = query.filter(StockItem.seller_id == seller_id)
        if status:
            query = query.filter(StockItem.status == status)

        total = query.count()
        items = query.order_by(StockItem.created_at.desc(), StockItem.id).offset(offset).limit(limit).all()
        return {
            "items": items,
            "total": total,
            "limit": limit,
            "offset": offset
        }

    def get_stock_item(self, item_id: UUID) -> StockItem:
        item = self.db.query(StockItem).options(
            selectinload(StockItem.seller)
        ).filter(StockItem.id == item_id).first()
        if not item:
            raise NotFoundError("Stock item", item_id)
        return item

    def update_stock_item(self, item_id: UUID, update_data: StockItemUpdate) -> StockItem:
        """Apply only the supplied fields (item_name, cost_price)."""
        item = self.get_stock_item(item_id)
        with committing(self.db, "updating stock item"):
            for field, value in update_data.model_dump(exclude_unset=True).items():
                if value is not None:
                    setattr(item, field, value)
        self.db.refresh(item)
        return item

    def delete_stock_item(self, item_id: UUID) -> None:
        InventoryLifecycleManager(self.db).delete_stock_item(item_id)
