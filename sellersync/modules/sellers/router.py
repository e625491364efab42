from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sellersync.database.database import get_db
from sellersync.modules.auth.dependencies import AuthDependencies
from sellersync.modules.sellers.service import SellerService
from sellersync.modules.sellers.schemas import (
    SellerCreate, SellerUpdate, SellerOut, SellerBalanceOut, SellerDetailOut
)

seller_router = APIRouter(tags=["Sellers"])

@seller_router.post("/", response_model=SellerOut, status_code=status.HTTP_201_CREATED)
def create_seller(
    seller: SellerCreate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return SellerService(db).create_seller(seller)

@seller_router.get("/", response_model=List[SellerBalanceOut])
def list_sellers(
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return SellerService(db).list_sellers()

@seller_router.get("/{seller_id}", response_model=SellerDetailOut)
def get_seller(
    seller_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_authenticated())
):
    return SellerService(db).get_seller(seller_id)

@seller_router.patch("/{seller_id}", response_model=SellerOut)
def update_seller(
    seller_id: UUID,
    update: SellerUpdate,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    return SellerService(db).update_seller(seller_id, update)

@seller_router.delete("/{seller_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_seller(
    seller_id: UUID,
    db: Session = Depends(get_db),
    auth_context = Depends(AuthDependencies.require_manager())
):
    SellerService(db).delete_seller(seller_id)
