"""
Report Assembler

Composes Balance Aggregator outputs into the dashboard, the printable
report data and the full JSON backup.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import inspect

from sellersync.modules.auth.models import User
from sellersync.modules.exhibitions.models import Exhibition
from sellersync.modules.payments.models import Payment, PendingAmount
from sellersync.modules.sales.models import Sale
from sellersync.modules.sellers.models import Seller
from sellersync.modules.stock.models import StockItem
from .balance import BalanceAggregator
from .base import BaseReportService

BACKUP_VERSION = "1.0"

# Model, export key, columns left out of the backup
BACKUP_TABLES = (
    (Seller, "sellers", ()),
    (Payment, "payments", ()),
    (PendingAmount, "pending_amounts", ()),
    (StockItem, "stock_items", ()),
    (Sale, "sales", ()),
    (Exhibition, "exhibitions", ()),
    (User, "users", ("password",)),
)


class ReportAssembler(BaseReportService):
    """Read-only composition of report payloads."""

    def __init__(self, db):
        super().__init__(db)
        self.balances = BalanceAggregator(db)

    def dashboard(self, today: Optional[date] = None) -> Dict[str, Any]:
        return {
            "payments": self.balances.global_summary(today=today),
            "sales": self.balances.sales_summary(),
            "stock": self.balances.stock_summary(),
            "exhibitions": self.balances.exhibition_summary(),
        }

    def printable_report(self) -> Dict[str, Any]:
        """
        Data for the printable balance sheet. Rendering is done by the
        client; this only supplies the figures.
        """
        summary = self.balances.global_summary()
        return {
            "generated_on": datetime.now(timezone.utc),
            "totals": {
                "total_payments": summary["total_payments"],
                "cash_in_hand": summary["cash_in_hand"],
                "total_pending": summary["total_pending"],
            },
            "sellers": [
                {
                    "name": row["name"],
                    "location": row["location"],
                    "initial_balance": row["initial_balance"],
                    "total_payments": row["total_payments"],
                    "balance_remaining": row["balance_remaining"],
                    "pending_amount": row["pending_amount"],
                }
                for row in summary["by_seller"]
            ],
        }

    def _dump_table(self, model, exclude=()) -> List[Dict[str, Any]]:
        """Every row of a table as a dict keyed by column name."""
        attrs = [
            attr for attr in inspect(model).column_attrs
            if attr.columns[0].name not in exclude
        ]
        rows = self.db.query(model).order_by(model.created_at, model.id).all()
        return [
            {attr.columns[0].name: getattr(obj, attr.key) for attr in attrs}
            for obj in rows
        ]

    def export_backup(self) -> Dict[str, Any]:
        """Full data export. User password hashes are never included."""
        return {
            "export_date": datetime.now(timezone.utc),
            "version": BACKUP_VERSION,
            "data": {
                key: self._dump_table(model, exclude)
                for model, key, exclude in BACKUP_TABLES
            },
        }
