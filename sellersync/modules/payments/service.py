from datetime import date
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy import desc
from sqlalchemy.orm import Session, selectinload

from sellersync.common.exceptions import NotFoundError
from sellersync.common.transactions import committing
from sellersync.modules.payments.models import Payment, PaymentType, PendingAmount, PendingStatus
from sellersync.modules.payments.schemas import (
    PaymentCreate, PaymentUpdate, PendingAmountCreate, PendingAmountUpdate
)
from sellersync.modules.sellers.models import Seller

logger = logging.getLogger(__name__)


class PaymentService:
    """
    Payments made to sellers.

    Payments are plain ledger rows: they never touch stock or sales, and
    every balance figure is derived from them at read time.
    """

    # Nullable columns a patch may clear; others ignore explicit nulls
    NULLABLE_FIELDS = {"reference_number", "notes", "image_path"}

    def __init__(self, db: Session):
        self.db = db

    def _ensure_seller(self, seller_id: UUID) -> None:
        if not self.db.get(Seller, seller_id):
            raise NotFoundError("Seller", seller_id)

    def list_payments(
        self,
        seller_id: Optional[UUID] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
        payment_type: Optional[PaymentType] = None,
    ) -> List[Payment]:
        """Payments, most recent payment_date first, then most recently recorded."""
        query = self.db.query(Payment).options(selectinload(Payment.seller))
        if seller_id:
            query = query.filter(Payment.seller_id == seller_id)
        if from_date:
            query = query.filter(Payment.payment_date >= from_date)
        if to_date:
            query = query.filter(Payment.payment_date <= to_date)
        if payment_type:
            query = query.filter(Payment.payment_type == payment_type)
        return query.order_by(desc(Payment.payment_date), desc(Payment.created_at)).all()

    def get_payment(self, payment_id: UUID) -> Payment:
        payment = self.db.query(Payment).options(
            selectinload(Payment.seller)
        ).filter(Payment.id == payment_id).first()
        if not payment:
            raise NotFoundError("Payment", payment_id)
        return payment

    def create_payment(self, payment_data: PaymentCreate, user_id: Optional[UUID] = None) -> Payment:
        """
        Record a payment to a seller.

        Raises:
            NotFoundError: if the seller does not exist
        """
        self._ensure_seller(payment_data.seller_id)
        payment = Payment(**payment_data.model_dump(), recorded_by=user_id)
        with committing(self.db, "recording payment"):
            self.db.add(payment)
        self.db.refresh(payment)
        logger.info(f"Payment {payment.id} of {payment.amount} recorded for seller {payment.seller_id}")
        return payment

    def update_payment(self, payment_id: UUID, update_data: PaymentUpdate) -> Payment:
        payment = self.get_payment(payment_id)
        changes = update_data.model_dump(exclude_unset=True)
        clear_image = changes.pop("clear_image", False)

        with committing(self.db, "updating payment"):
            for field, value in changes.items():
                if value is None and field not in self.NULLABLE_FIELDS:
                    continue
                setattr(payment, field, value)
            if clear_image:
                payment.image_path = None
        self.db.refresh(payment)
        return payment

    def delete_payment(self, payment_id: UUID) -> None:
        payment = self.get_payment(payment_id)
        with committing(self.db, "deleting payment"):
            self.db.delete(payment)
        logger.info(f"Payment {payment_id} deleted")


class PendingAmountService:
    """Manually tracked amounts owed to sellers."""

    NULLABLE_FIELDS = {"due_date", "description"}

    def __init__(self, db: Session):
        self.db = db

    def list_pending(self, seller_id: Optional[UUID] = None) -> List[PendingAmount]:
        """Every non-paid pending amount, earliest due date first; undated ones last."""
        query = self.db.query(PendingAmount).options(
            selectinload(PendingAmount.seller)
        ).filter(PendingAmount.status != PendingStatus.PAID)
        if seller_id:
            query = query.filter(PendingAmount.seller_id == seller_id)
        return query.order_by(
            PendingAmount.due_date.is_(None),
            PendingAmount.due_date,
            PendingAmount.created_at
        ).all()

    def get_pending(self, pending_id: UUID) -> PendingAmount:
        pending = self.db.get(PendingAmount, pending_id)
        if not pending:
            raise NotFoundError("Pending amount", pending_id)
        return pending

    def create_pending(self, pending_data: PendingAmountCreate) -> PendingAmount:
        if not self.db.get(Seller, pending_data.seller_id):
            raise NotFoundError("Seller", pending_data.seller_id)
        pending = PendingAmount(**pending_data.model_dump())
        with committing(self.db, "adding pending amount"):
            self.db.add(pending)
        self.db.refresh(pending)
        logger.info(f"Pending amount {pending.id} added for seller {pending.seller_id}")
        return pending

    def update_pending(self, pending_id: UUID, update_data: PendingAmountUpdate) -> PendingAmount:
        pending = self.get_pending(pending_id)
        with committing(self.db, "updating pending amount"):
            for field, value in update_data.model_dump(exclude_unset=True).items():
                if value is None and field not in self.NULLABLE_FIELDS:
                    continue
                setattr(pending, field, value)
        self.db.refresh(pending)
        return pending

    def delete_pending(self, pending_id: UUID) -> None:
        pending = self.get_pending(pending_id)
        with committing(self.db, "deleting pending amount"):
            self.db.delete(pending)
        logger.info(f"Pending amount {pending_id} deleted")
