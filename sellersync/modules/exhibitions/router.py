from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status, Query
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.exhibitions.models import ExhibitionStatus
from sellersync.modules.exhibitions.service import ExhibitionService
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.exhibitions.schemas import (
    ExhibitionCreate, ExhibitionUpdate, ExhibitionOut, ExhibitionStatsOut,
    ExhibitionDetailOut, ExhibitionSummaryResponse
)

exhibition_router = APIRouter(tags=["Exhibitions"])

@exhibition_router.get("/", response_model=List[ExhibitionStatsOut])
def list_exhibitions(
    status: Optional[ExhibitionStatus] = Query(None),
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return ExhibitionService(db).list_exhibitions(status)

@exhibition_router.get("/summary", response_model=ExhibitionSummaryResponse)
def exhibition_summary(
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return BalanceAggregator(db).exhibition_summary()

@exhibition_router.get("/{exhibition_id}", response_model=ExhibitionDetailOut)
def get_exhibition(
    exhibition_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return ExhibitionService(db).get_exhibition(exhibition_id)

@exhibition_router.post("/", response_model=ExhibitionOut, status_code=status.HTTP_201_CREATED)
def create_exhibition(
    exhibition: ExhibitionCreate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return ExhibitionService(db).create_exhibition(exhibition)

@exhibition_router.patch("/{exhibition_id}", response_model=ExhibitionOut)
def update_exhibition(
    exhibition_id: UUID,
    update: ExhibitionUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return ExhibitionService(db).update_exhibition(exhibition_id, update)

@exhibition_router.delete("/{exhibition_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_exhibition(
    exhibition_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    ExhibitionService(db).delete_exhibition(exhibition_id)
