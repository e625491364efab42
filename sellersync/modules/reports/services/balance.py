"""
Balance Aggregator

Read-only financial figures derived from sellers, stock items, sales,
payments and pending amounts. Nothing here mutates the store.

Formulas:
    cash_in_hand      = SUM(seller.initial_balance) - SUM(payment.amount)
    pending_amount    = SUM(pending.amount) for one seller, status != paid
    balance_remaining = seller.initial_balance - SUM(payments of that seller)
    rolling_cash      = SUM(sale.selling_price) - SUM(payment.amount)
    profit            = SUM(sale.selling_price) - SUM(cost_price of sold items)

``cash_in_hand`` and ``rolling_cash`` are two independent views of cash and
are reported side by side without reconciliation.
"""

from datetime import date, datetime, timezone
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import case, desc, extract, func

from sellersync.common.exceptions import NotFoundError
from sellersync.core.config import settings
from sellersync.modules.exhibitions.models import Exhibition, ExhibitionStatus
from sellersync.modules.payments.models import Payment, PendingAmount
from sellersync.modules.sales.models import Sale
from sellersync.modules.sellers.models import Seller
from sellersync.modules.stock.models import StockItem
from sellersync.modules.stock.state_machine import StockStatus
from .base import BaseReportService, months_before, to_money


class BalanceAggregator(BaseReportService):
    """Derived balances, summaries and the financial report."""

    # ----- per seller -----

    def seller_balances(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        seller_id: Optional[UUID] = None
    ) -> List[Dict]:
        """
        One row per seller with initial_balance, total_payments,
        balance_remaining and pending_amount, ordered by name.

        The date range narrows the payments only; sellers without payments
        in range still appear with zero totals.
        """
        payments = self._payments_by_seller(start_date, end_date)
        pending = self._pending_by_seller()

        query = self.db.query(
            Seller,
            func.coalesce(payments.c.total, 0).label("total_payments"),
            func.coalesce(pending.c.total, 0).label("pending_amount")
        ).select_from(Seller).outerjoin(
            payments, payments.c.seller_id == Seller.id
        ).outerjoin(
            pending, pending.c.seller_id == Seller.id
        )

        if seller_id:
            query = query.filter(Seller.id == seller_id)

        rows = []
        for seller, total_payments, pending_amount in query.order_by(Seller.name, Seller.id).all():
            initial_balance = to_money(seller.initial_balance)
            total_payments = to_money(total_payments)
            rows.append({
                "id": seller.id,
                "name": seller.name,
                "location": seller.location,
                "contact_person": seller.contact_person,
                "phone": seller.phone,
                "email": seller.email,
                "notes": seller.notes,
                "status": seller.status,
                "initial_balance": initial_balance,
                "total_payments": total_payments,
                "balance_remaining": initial_balance - total_payments,
                "pending_amount": to_money(pending_amount),
                "created_at": seller.created_at,
            })
        return rows

    def seller_detail(self, seller_id: UUID) -> Dict:
        """
        Seller record with totals, the most recent payments and every
        non-paid pending amount.

        Raises:
            NotFoundError: if the seller does not exist
        """
        rows = self.seller_balances(seller_id=seller_id)
        if not rows:
            raise NotFoundError("Seller", seller_id)

        recent_payments = self._get_base_payment_query().filter(
            Payment.seller_id == seller_id
        ).order_by(
            desc(Payment.payment_date),
            desc(Payment.created_at)
        ).limit(settings.RECENT_PAYMENTS_LIMIT).all()

        pending_details = self.db.query(PendingAmount).filter(
            PendingAmount.seller_id == seller_id,
            self._unpaid_pending_filter()
        ).order_by(PendingAmount.due_date, PendingAmount.created_at).all()

        detail = rows[0]
        detail["recent_payments"] = recent_payments
        detail["pending_details"] = pending_details
        return detail

    # ----- payments / cash -----

    def monthly_trend(self, today: Optional[date] = None, months: Optional[int] = None) -> List[Dict]:
        """
        Payment totals per calendar month over the trailing window, oldest
        first. Months without payments are absent, not zero-filled.
        """
        today = today or date.today()
        cutoff = months_before(today, months or settings.MONTHLY_TREND_MONTHS)

        year = extract("year", Payment.payment_date)
        month = extract("month", Payment.payment_date)

        rows = self.db.query(
            year.label("year"),
            month.label("month"),
            func.sum(Payment.amount).label("total")
        ).filter(
            Payment.payment_date >= cutoff
        ).group_by(year, month).order_by(year, month).all()

        return [
            {"month": f"{int(row.year):04d}-{int(row.month):02d}", "total": to_money(row.total)}
            for row in rows
        ]

    def global_summary(self, today: Optional[date] = None) -> Dict:
        """Business-wide payment totals, cash in hand and per-seller breakdown."""
        total_payments = self._sum(Payment.amount)
        total_initial_balance = self._sum(Seller.initial_balance)
        total_pending = self._sum(PendingAmount.amount, self._unpaid_pending_filter())

        return {
            "total_payments": total_payments,
            "total_initial_balance": total_initial_balance,
            "cash_in_hand": total_initial_balance - total_payments,
            "total_pending": total_pending,
            "by_seller": self.seller_balances(),
            "monthly_trend": self.monthly_trend(today=today),
        }

    # ----- sales -----

    def sales_summary(self) -> Dict:
        """Sales proceeds, cost of sold items, rolling cash and profit."""
        total_sales = self._sum(Sale.selling_price)
        total_cost = to_money(
            self.db.query(func.coalesce(func.sum(StockItem.cost_price), 0))
            .select_from(Sale)
            .join(StockItem, Sale.stock_item_id == StockItem.id)
            .scalar()
        )
        total_payments = self._sum(Payment.amount)

        by_method = self.db.query(
            Sale.payment_method,
            func.coalesce(func.sum(Sale.selling_price), 0).label("total"),
            func.count(Sale.id).label("sales_count")
        ).group_by(Sale.payment_method).order_by(Sale.payment_method).all()

        return {
            "total_sales": total_sales,
            "total_cost": total_cost,
            "total_payments": total_payments,
            "rolling_cash": total_sales - total_payments,
            "profit": total_sales - total_cost,
            "sales_by_method": [
                {
                    "payment_method": getattr(row.payment_method, "value", row.payment_method),
                    "total": to_money(row.total),
                    "count": row.sales_count,
                }
                for row in by_method
            ],
        }

    # ----- stock -----

    def stock_summary(self) -> Dict:
        """In-stock value, item counts per status and per-seller stock figures."""
        total_stock_value = self._sum(StockItem.cost_price, StockItem.status == StockStatus.IN_STOCK)

        counts = self.db.query(
            StockItem.status,
            func.count(StockItem.id).label("count")
        ).group_by(StockItem.status).all()

        in_stock = StockItem.status == StockStatus.IN_STOCK
        sold = StockItem.status == StockStatus.SOLD
        per_seller = self.db.query(
            Seller.id,
            Seller.name,
            func.count(case((in_stock, 1))).label("items_in_stock"),
            func.coalesce(func.sum(case((in_stock, StockItem.cost_price), else_=0)), 0).label("stock_value"),
            func.count(case((sold, 1))).label("items_sold")
        ).select_from(Seller).outerjoin(
            StockItem, StockItem.seller_id == Seller.id
        ).group_by(Seller.id, Seller.name).order_by(Seller.name, Seller.id).all()

        return {
            "total_stock_value": total_stock_value,
            "stock_count": [
                {"status": getattr(status, "value", status), "count": count}
                for status, count in counts
            ],
            "seller_summary": [
                {
                    "id": row.id,
                    "name": row.name,
                    "items_in_stock": row.items_in_stock,
                    "stock_value": to_money(row.stock_value),
                    "items_sold": row.items_sold,
                }
                for row in per_seller
            ],
        }

    # ----- exhibitions -----

    def exhibition_summary(self) -> Dict:
        """Exhibition counts plus totals over every sale attached to an exhibition."""
        counts = dict(
            self.db.query(Exhibition.status, func.count(Exhibition.id))
            .group_by(Exhibition.status).all()
        )
        total_sales, total_profit = self.db.query(
            func.coalesce(func.sum(Sale.selling_price), 0),
            func.coalesce(func.sum(Sale.selling_price - StockItem.cost_price), 0)
        ).select_from(Sale).join(
            StockItem, Sale.stock_item_id == StockItem.id
        ).filter(Sale.exhibition_id.isnot(None)).one()

        return {
            "total_exhibitions": sum(counts.values()),
            "active_exhibitions": counts.get(ExhibitionStatus.ACTIVE, 0),
            "upcoming_exhibitions": counts.get(ExhibitionStatus.UPCOMING, 0),
            "total_sales": to_money(total_sales),
            "total_profit": to_money(total_profit),
        }

    # ----- financial report -----

    def payment_type_breakdown(self, start_date: Optional[date] = None,
                               end_date: Optional[date] = None) -> List[Dict]:
        query = self.db.query(
            Payment.payment_type,
            func.count(Payment.id).label("row_count"),
            func.coalesce(func.sum(Payment.amount), 0).label("total")
        )
        query = self._apply_date_filter(query, Payment.payment_date, start_date, end_date)
        rows = query.group_by(Payment.payment_type).order_by(Payment.payment_type).all()
        return [
            {
                "payment_type": getattr(row.payment_type, "value", row.payment_type),
                "count": row.row_count,
                "total": to_money(row.total),
            }
            for row in rows
        ]

    def financial_report(
        self,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        seller_id: Optional[UUID] = None
    ) -> Dict:
        """
        Date-filtered financial report.

        ``from_date``/``to_date`` restrict Payment.payment_date only: payment
        totals, per-seller payments and the payment-type breakdown. Initial
        balances, pending amounts and the embedded sales figures are always
        all-time. ``seller_id`` narrows the per-seller rows; headline totals
        stay business-wide.
        """
        payment_query = self._apply_date_filter(
            self.db.query(func.coalesce(func.sum(Payment.amount), 0)),
            Payment.payment_date, from_date, to_date
        )
        total_payments = to_money(payment_query.scalar())
        total_initial_balance = self._sum(Seller.initial_balance)
        total_pending = self._sum(PendingAmount.amount, self._unpaid_pending_filter())

        return {
            "report_date": datetime.now(timezone.utc),
            "date_range": {
                "from": from_date.isoformat() if from_date else "All time",
                "to": to_date.isoformat() if to_date else "Present",
            },
            "summary": {
                "total_initial_balance": total_initial_balance,
                "total_payments": total_payments,
                "cash_in_hand": total_initial_balance - total_payments,
                "total_pending": total_pending,
            },
            "by_seller": self.seller_balances(from_date, to_date, seller_id),
            "by_payment_type": self.payment_type_breakdown(from_date, to_date),
            "sales": self.sales_summary(),
        }
