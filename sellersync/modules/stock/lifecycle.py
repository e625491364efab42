"""
Inventory Lifecycle Manager

The only code allowed to move a stock item between ``in_stock`` and
``sold``. Each transition is paired with its side effect on the sales table
and both are committed together or not at all:

- record_sale:       insert Sale      + SELL     (in_stock -> sold)
- delete_sale:       delete Sale      + RESTORE  (sold -> in_stock)
- delete_stock_item: delete the item, only while in_stock
"""
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from sellersync.common.exceptions import ConflictStateError, NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.exhibitions.models import Exhibition
from sellersync.modules.sales.models import Sale
from sellersync.modules.sales.schemas import SaleCreate
from sellersync.modules.stock.models import StockItem
from sellersync.modules.stock.state_machine import StockLifecycle, LifecycleEvent

logger = logging.getLogger(__name__)


class InventoryLifecycleManager:
    """Transactional stock item transitions."""

    def __init__(self, db: Session):
        self.db = db

    def _lock_stock_item(self, item_id: UUID) -> StockItem:
        """Lock and reload the item row so concurrent sales serialize on it."""
        item = self.db.query(StockItem).filter(
            StockItem.id == item_id
        ).with_for_update().populate_existing().first()
        if not item:
            raise NotFoundError("Stock item", item_id)
        return item

    def record_sale(self, sale_data: SaleCreate, user_id: UUID = None) -> Sale:
        """
        Record the sale of an in-stock item and mark it sold.

        Raises:
            NotFoundError: item or exhibition does not exist
            ConflictStateError: item is already sold
            PersistenceFailure: the transaction failed; nothing was written
        """
        with committing(self.db, "recording sale"):
            item = self._lock_stock_item(sale_data.stock_item_id)
            if not StockLifecycle.can_apply(item.status, LifecycleEvent.SELL):
                raise ConflictStateError(
                    "Stock item is already sold.",
                    code="ITEM_ALREADY_SOLD",
                    stock_item_id=str(item.id),
                )

            if sale_data.exhibition_id is not None:
                exhibition = self.db.get(Exhibition, sale_data.exhibition_id)
                if not exhibition:
                    raise NotFoundError("Exhibition", sale_data.exhibition_id)

            sale = Sale(
                stock_item_id=item.id,
                selling_price=sale_data.selling_price,
                payment_method=sale_data.payment_method,
                sale_date=sale_data.sale_date,
                notes=sale_data.notes,
                exhibition_id=sale_data.exhibition_id,
                recorded_by=user_id,
            )
            self.db.add(sale)
            item.apply(LifecycleEvent.SELL)
            self.db.flush()

        self.db.refresh(sale)
        logger.info(f"Sale {sale.id} recorded; stock item {item.id} -> {item.status.value}")
        return sale

    def delete_sale(self, sale_id: UUID) -> None:
        """
        Delete a sale and return its stock item to stock.

        Raises:
            NotFoundError: the sale does not exist
            PersistenceFailure: the transaction failed; nothing was written
        """
        with committing(self.db, "deleting sale"):
            sale = self.db.query(Sale).filter(
                Sale.id == sale_id
            ).with_for_update().populate_existing().first()
            if not sale:
                raise NotFoundError("Sale", sale_id)

            item = self._lock_stock_item(sale.stock_item_id)
            self.db.delete(sale)
            item.apply(LifecycleEvent.RESTORE)
            self.db.flush()

        logger.info(f"Sale {sale_id} deleted; stock item {item.id} restored to {item.status.value}")

    def delete_stock_item(self, item_id: UUID) -> None:
        """
        Delete a stock item that has not been sold.

        Raises:
            NotFoundError: the item does not exist
            ConflictStateError: the item is sold (its sale must be deleted first)
        """
        with committing(self.db, "deleting stock item"):
            item = self._lock_stock_item(item_id)
            # only an item that could still be sold has no sale attached
            if not StockLifecycle.can_apply(item.status, LifecycleEvent.SELL):
                raise ConflictStateError(
                    "Stock item is sold and cannot be deleted.",
                    code="ITEM_SOLD",
                    stock_item_id=str(item.id),
                )
            self.db.delete(item)

        logger.info(f"Stock item {item_id} deleted")
