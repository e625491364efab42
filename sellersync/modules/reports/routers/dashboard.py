"""
Dashboard Router

Dashboard aggregate, printable report data and the JSON backup export.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.auth.schemas import AuthContext
from ..services.assembler import ReportAssembler
from ..schemas import DashboardResponse, PrintableReportResponse, BackupExportResponse


router = APIRouter(prefix="/reports", tags=["Reports"])


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    auth_context: AuthContext = Depends(AuthDependencies.require_authenticated()),
    db: Session = Depends(get_db)
):
    return ReportAssembler(db).dashboard()


@router.get("/printable", response_model=PrintableReportResponse)
def get_printable_report(
    auth_context: AuthContext = Depends(AuthDependencies.require_authenticated()),
    db: Session = Depends(get_db)
):
    """Figures for the printable balance sheet."""
    return ReportAssembler(db).printable_report()


@router.get("/export/json", response_model=BackupExportResponse)
def export_backup(
    auth_context: AuthContext = Depends(AuthDependencies.require_manager()),
    db: Session = Depends(get_db)
):
    """Full backup of every table. Restricted to write roles."""
    return ReportAssembler(db).export_backup()
