from datetime import date
from typing import Dict, Any, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from sellersync.common.exceptions import NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.exhibitions.models import Exhibition
from sellersync.modules.sales.models import Sale, SalePaymentMethod
from sellersync.modules.sales.schemas import SaleCreate, SaleUpdate
from sellersync.modules.sellers.models import Seller
from sellersync.modules.stock.lifecycle import InventoryLifecycleManager
from sellersync.modules.stock.models import StockItem

logger = logging.getLogger(__name__)


def sale_row(sale: Sale, item: StockItem, seller_name: Optional[str]) -> Dict[str, Any]:
    """Flatten a sale with its stock item and seller for listing."""
    return {
        "id": sale.id,
        "stock_item_id": sale.stock_item_id,
        "selling_price": sale.selling_price,
        "payment_method": sale.payment_method,
        "sale_date": sale.sale_date,
        "notes": sale.notes,
        "exhibition_id": sale.exhibition_id,
        "recorded_by": sale.recorded_by,
        "created_at": sale.created_at,
        "item_name": item.item_name,
        "cost_price": item.cost_price,
        "seller_id": item.seller_id,
        "seller_name": seller_name,
    }


class SaleService:
    """Sales listing and editing. Recording and deleting go through the lifecycle manager."""

    def __init__(self, db: Session):
        self.db = db
        self.lifecycle = InventoryLifecycleManager(db)

    def _joined_query(self):
        return self.db.query(Sale, StockItem, Seller.name).select_from(Sale).join(
            StockItem, Sale.stock_item_id == StockItem.id
        ).join(
            Seller, StockItem.seller_id == Seller.id
        )

    def list_sales(
        self,
        seller_id: Optional[UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        payment_method: Optional[SalePaymentMethod] = None,
        exhibition_id: Optional[UUID] = None,
    ) -> list:
        """Sales newest first, joined with item and seller."""
        query = self._joined_query()
        if seller_id:
            query = query.filter(StockItem.seller_id == seller_id)
        if from_date:
            query = query.filter(Sale.sale_date >= from_date)
        if to_date:
            query = query.filter(Sale.sale_date <= to_date)
        if payment_method:
            query = query.filter(Sale.payment_method == payment_method)
        if exhibition_id:
            query = query.filter(Sale.exhibition_id == exhibition_id)

        rows = query.order_by(Sale.sale_date.desc(), Sale.created_at.desc()).all()
        return [sale_row(sale, item, seller_name) for sale, item, seller_name in rows]

    def get_sale(self, sale_id: UUID) -> Dict[str, Any]:
        row = self._joined_query().filter(Sale.id == sale_id).first()
        if not row:
            raise NotFoundError("Sale", sale_id)
        return sale_row(*row)

    def record_sale(self, sale_data: SaleCreate, user_id: Optional[UUID] = None) -> Sale:
        return self.lifecycle.record_sale(sale_data, user_id)

    def update_sale(self, sale_id: UUID, update_data: SaleUpdate) -> Dict[str, Any]:
        """
        Patch price, method, date, notes or exhibition of a sale.
        The stock item of a sale never changes; delete and re-record instead.
        """
        sale = self.db.get(Sale, sale_id)
        if not sale:
            raise NotFoundError("Sale", sale_id)

        changes = update_data.model_dump(exclude_unset=True)
        if changes.get("exhibition_id") is not None and not self.db.get(Exhibition, changes["exhibition_id"]):
            raise NotFoundError("Exhibition", changes["exhibition_id"])

        with committing(self.db, "updating sale"):
            for field, value in changes.items():
                # exhibition_id may be cleared explicitly, the rest are non-nullable
                if value is None and field not in ("exhibition_id", "notes"):
                    continue
                setattr(sale, field, value)
        return self.get_sale(sale_id)

    def delete_sale(self, sale_id: UUID) -> None:
        self.lifecycle.delete_sale(sale_id)
