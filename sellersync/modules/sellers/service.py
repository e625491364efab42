from typing import Any, Dict, List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from sellersync.common.exceptions import NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.reports.services.balance import BalanceAggregator
from sellersync.modules.sellers.models import Seller
from sellersync.modules.sellers.schemas import SellerCreate, SellerUpdate

logger = logging.getLogger(__name__)

# Columns that must never be written as NULL
REQUIRED_FIELDS = {"name", "initial_balance", "status"}


class SellerService:
    def __init__(self, db: Session):
        self.db = db
        self.balances = BalanceAggregator(db)

    def create_seller(self, seller_data: SellerCreate) -> Seller:
        seller = Seller(**seller_data.model_dump())
        with committing(self.db, "creating seller"):
            self.db.add(seller)
        self.db.refresh(seller)
        logger.info(f"Seller {seller.id} created")
        return seller

    def list_sellers(self) -> List[Dict[str, Any]]:
        """All sellers ordered by name with total_payments and pending_amount."""
        return self.balances.seller_balances()

    def get_seller(self, seller_id: UUID) -> Dict[str, Any]:
        """
        Seller with totals, recent payments and open pending amounts.

        Raises:
            NotFoundError: if the seller does not exist
        """
        return self.balances.seller_detail(seller_id)

    def _get_seller_model(self, seller_id: UUID) -> Seller:
        seller = self.db.get(Seller, seller_id)
        if not seller:
            raise NotFoundError("Seller", seller_id)
        return seller

    def update_seller(self, seller_id: UUID, update_data: SellerUpdate) -> Seller:
        seller = self._get_seller_model(seller_id)
        with committing(self.db, "updating seller"):
            for field, value in update_data.model_dump(exclude_unset=True).items():
                if value is None and field in REQUIRED_FIELDS:
                    continue
                setattr(seller, field, value)
        self.db.refresh(seller)
        return seller

    def delete_seller(self, seller_id: UUID) -> None:
        """Delete a seller together with its stock items, sales, payments and pending amounts."""
        seller = self._get_seller_model(seller_id)
        with committing(self.db, "deleting seller"):
            self.db.delete(seller)
        logger.info(f"Seller {seller_id} deleted")
