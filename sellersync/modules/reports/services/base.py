"""
Base service class for Reports module

Provides the session handling, coalescing sums and common filters shared by
the report services.
"""

import calendar
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_, func
from sqlalchemy.orm import Session

from sellersync.common.money import to_money
from sellersync.modules.sellers.models import Seller
from sellersync.modules.stock.models import StockItem
from sellersync.modules.sales.models import Sale
from sellersync.modules.payments.models import Payment, PendingAmount, PendingStatus
from sellersync.modules.exhibitions.models import Exhibition


def months_before(day: date, months: int) -> date:
    """Same day ``months`` calendar months earlier, clamped to month end."""
    index = day.year * 12 + (day.month - 1) - months
    year, month0 = divmod(index, 12)
    last_day = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(day.day, last_day))


class BaseReportService:
    """Base service class for all report services"""

    def __init__(self, db: Session):
        self.db = db

    def _sum(self, column, *filters) -> Decimal:
        """COALESCE(SUM(column), 0) with optional filters"""
        query = self.db.query(func.coalesce(func.sum(column), 0))
        if filters:
            query = query.filter(*filters)
        return to_money(query.scalar())

    def _get_base_seller_query(self):
        return self.db.query(Seller)

    def _get_base_stock_query(self):
        return self.db.query(StockItem)

    def _get_base_sale_query(self):
        return self.db.query(Sale)

    def _get_base_payment_query(self):
        return self.db.query(Payment)

    def _get_base_exhibition_query(self):
        return self.db.query(Exhibition)

    def _unpaid_pending_filter(self):
        """Pending amounts still owed: every status except paid"""
        return PendingAmount.status != PendingStatus.PAID

    def _apply_date_filter(self, query, date_field, start_date: Optional[date] = None,
                           end_date: Optional[date] = None):
        """Apply an optional, open-ended date range filter to a query"""
        conditions = []
        if start_date is not None:
            conditions.append(date_field >= start_date)
        if end_date is not None:
            conditions.append(date_field <= end_date)
        if conditions:
            query = query.filter(and_(*conditions))
        return query

    def _payments_by_seller(self, start_date: Optional[date] = None, end_date: Optional[date] = None):
        """Subquery: seller_id, total paid (optionally within a date range)"""
        query = self.db.query(
            Payment.seller_id.label("seller_id"),
            func.sum(Payment.amount).label("total")
        )
        query = self._apply_date_filter(query, Payment.payment_date, start_date, end_date)
        return query.group_by(Payment.seller_id).subquery()

    def _pending_by_seller(self):
        """Subquery: seller_id, total of non-paid pending amounts"""
        return self.db.query(
            PendingAmount.seller_id.label("seller_id"),
            func.sum(PendingAmount.amount).label("total")
        ).filter(
            self._unpaid_pending_filter()
        ).group_by(PendingAmount.seller_id).subquery()
