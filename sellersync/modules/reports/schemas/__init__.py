"""
Pydantic schemas for Reports module

Response models for the financial report, dashboard, printable report and
backup export.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from sellersync.modules.exhibitions.schemas import ExhibitionSummaryResponse
from sellersync.modules.payments.schemas import GlobalSummaryResponse, SellerBalanceRow
from sellersync.modules.sales.schemas import SalesSummaryResponse
from sellersync.modules.stock.schemas import StockSummaryResponse


class DateRange(BaseModel):
    from_: str = Field(..., alias="from")
    to: str

    class Config:
        populate_by_name = True


class FinancialSummary(BaseModel):
    total_initial_balance: Decimal
    total_payments: Decimal
    cash_in_hand: Decimal
    total_pending: Decimal


class PaymentTypeBreakdown(BaseModel):
    payment_type: str
    count: int
    total: Decimal


class FinancialReportResponse(BaseModel):
    report_date: datetime
    date_range: DateRange
    summary: FinancialSummary
    by_seller: List[SellerBalanceRow]
    by_payment_type: List[PaymentTypeBreakdown]
    sales: SalesSummaryResponse


class DashboardResponse(BaseModel):
    payments: GlobalSummaryResponse
    sales: SalesSummaryResponse
    stock: StockSummaryResponse
    exhibitions: ExhibitionSummaryResponse


class PrintableTotals(BaseModel):
    total_payments: Decimal
    cash_in_hand: Decimal
    total_pending: Decimal


class PrintableSellerRow(BaseModel):
    name: str
    location: Optional[str] = None
    initial_balance: Decimal
    total_payments: Decimal
    balance_remaining: Decimal
    pending_amount: Decimal


class PrintableReportResponse(BaseModel):
    generated_on: datetime
    totals: PrintableTotals
    sellers: List[PrintableSellerRow]


class BackupExportResponse(BaseModel):
    export_date: datetime
    version: str
    data: Dict[str, List[Dict[str, Any]]]
