from typing import Any, Dict, List, Optional
from uuid import UUID
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from sellersync.common.exceptions import NotFoundError, ValidationError
from sellersync.common.transactions import committing
from sellersync.modules.exhibitions.models import Exhibition, ExhibitionStatus
from sellersync.modules.exhibitions.schemas import ExhibitionCreate, ExhibitionUpdate
from sellersync.common.money import to_money
from sellersync.modules.sales.models import Sale
from sellersync.modules.sales.service import SaleService
from sellersync.modules.stock.models import StockItem

logger = logging.getLogger(__name__)


def exhibition_row(exhibition: Exhibition) -> Dict[str, Any]:
    return {
        "id": exhibition.id,
        "name": exhibition.name,
        "location": exhibition.location,
        "start_date": exhibition.start_date,
        "end_date": exhibition.end_date,
        "notes": exhibition.notes,
        "status": exhibition.status,
        "created_at": exhibition.created_at,
    }


class ExhibitionService:
    """Exhibitions and the sales attributed to them."""

    def __init__(self, db: Session):
        self.db = db

    def _sales_stats(self):
        """Subquery: exhibition_id, sales_count, total_sales, total_profit."""
        return self.db.query(
            Sale.exhibition_id.label("exhibition_id"),
            func.count(Sale.id).label("sales_count"),
            func.sum(Sale.selling_price).label("total_sales"),
            func.sum(Sale.selling_price - StockItem.cost_price).label("total_profit")
        ).select_from(Sale).join(
            StockItem, Sale.stock_item_id == StockItem.id
        ).filter(
            Sale.exhibition_id.isnot(None)
        ).group_by(Sale.exhibition_id).subquery()

    def list_exhibitions(
        self,
        status: Optional[ExhibitionStatus] = None,
        exhibition_id: Optional[UUID] = None
    ) -> List[Dict[str, Any]]:
        """Exhibitions, latest start first, each with its sales figures."""
        stats = self._sales_stats()
        query = self.db.query(
            Exhibition,
            func.coalesce(stats.c.sales_count, 0),
            func.coalesce(stats.c.total_sales, 0),
            func.coalesce(stats.c.total_profit, 0)
        ).select_from(Exhibition).outerjoin(stats, stats.c.exhibition_id == Exhibition.id)
        if status:
            query = query.filter(Exhibition.status == status)
        if exhibition_id:
            query = query.filter(Exhibition.id == exhibition_id)

        rows = []
        for exhibition, sales_count, total_sales, total_profit in query.order_by(
            Exhibition.start_date.desc(), Exhibition.created_at.desc()
        ).all():
            row = exhibition_row(exhibition)
            row.update({
                "sales_count": sales_count,
                "total_sales": to_money(total_sales),
                "total_profit": to_money(total_profit),
            })
            rows.append(row)
        return rows

    def _get_exhibition_model(self, exhibition_id: UUID) -> Exhibition:
        exhibition = self.db.get(Exhibition, exhibition_id)
        if not exhibition:
            raise NotFoundError("Exhibition", exhibition_id)
        return exhibition

    def get_exhibition(self, exhibition_id: UUID) -> Dict[str, Any]:
        """Exhibition with its figures and every sale attributed to it."""
        rows = self.list_exhibitions(exhibition_id=exhibition_id)
        if not rows:
            raise NotFoundError("Exhibition", exhibition_id)
        row = rows[0]
        row["sales"] = SaleService(self.db).list_sales(exhibition_id=exhibition_id)
        return row

    def create_exhibition(self, exhibition_data: ExhibitionCreate) -> Exhibition:
        exhibition = Exhibition(**exhibition_data.model_dump())
        with committing(self.db, "creating exhibition"):
            self.db.add(exhibition)
        self.db.refresh(exhibition)
        logger.info(f"Exhibition {exhibition.id} created")
        return exhibition

    def update_exhibition(self, exhibition_id: UUID, update_data: ExhibitionUpdate) -> Exhibition:
        exhibition = self._get_exhibition_model(exhibition_id)
        changes = update_data.model_dump(exclude_unset=True)

        start_date = changes.get("start_date", exhibition.start_date)
        end_date = changes.get("end_date", exhibition.end_date)
        if start_date and end_date and end_date < start_date:
            raise ValidationError("end_date must be on or after start_date", field="end_date")

        with committing(self.db, "updating exhibition"):
            for field, value in changes.items():
                if value is None and field in ("name", "status"):
                    continue
                setattr(exhibition, field, value)
        self.db.refresh(exhibition)
        return exhibition

    def delete_exhibition(self, exhibition_id: UUID) -> None:
        """
        Delete an exhibition. Its sales are kept and detached in the same
        transaction.
        """
        exhibition = self._get_exhibition_model(exhibition_id)
        with committing(self.db, "deleting exhibition"):
            detached = self.db.query(Sale).filter(
                Sale.exhibition_id == exhibition_id
            ).update({Sale.exhibition_id: None}, synchronize_session="fetch")
            self.db.delete(exhibition)
        logger.info(f"Exhibition {exhibition_id} deleted; {detached} sales detached")
