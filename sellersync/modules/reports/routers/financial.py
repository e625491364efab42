"""
Financial Reports Router

Date-filtered financial report with optional CSV export.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from sellersync.common.exceptions import ValidationError
from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.auth.schemas import AuthContext
from ..services.balance import BalanceAggregator
from ..schemas import FinancialReportResponse
from ..utils import (
    create_csv_response,
    prepare_seller_balances_csv,
    CSV_HEADERS
)


router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/financial", response_model=None)
def get_financial_report(
    from_date: Optional[date] = Query(None, description="Earliest payment date included"),
    to_date: Optional[date] = Query(None, description="Latest payment date included"),
    seller_id: Optional[UUID] = Query(None, description="Restrict per-seller rows to one seller"),
    export: Optional[str] = Query(None, pattern="^(csv)$", description="Export format: csv"),
    auth_context: AuthContext = Depends(AuthDependencies.require_authenticated()),
    db: Session = Depends(get_db)
):
    """
    Financial report. The date range applies to payments; initial
    balances, pending amounts and sales figures are all-time.
    """
    if from_date and to_date and to_date < from_date:
        raise ValidationError("to_date must be greater than or equal to from_date", field="to_date")

    report_data = BalanceAggregator(db).financial_report(from_date, to_date, seller_id)

    if export == "csv":
        csv_data = prepare_seller_balances_csv(report_data)
        filename = f"financial_report_{from_date or 'all'}_{to_date or 'present'}.csv"
        return create_csv_response(csv_data, filename, CSV_HEADERS["seller_balances"])

    return FinancialReportResponse(**report_data)
