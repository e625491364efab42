from sellersync.database.database import Base
from sqlalchemy import Column, String, Date, ForeignKey, Numeric, Enum, Text, Uuid
from sqlalchemy.orm import relationship
from sellersync.common.mixins import BaseMixin
import enum


class PaymentType(str, enum.Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    UPI = "upi"
    CHEQUE = "cheque"


class PendingStatus(str, enum.Enum):
    PENDING = "pending"
    PARTIAL = "partial"
    PAID = "paid"


class Payment(Base, BaseMixin):
    """Cash paid out to a seller against their running balance."""
    __tablename__ = "payments"

    seller_id = Column(Uuid(as_uuid=True), ForeignKey("sellers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    payment_date = Column(Date, nullable=False, index=True)
    payment_type = Column(
        Enum(PaymentType, name="payment_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PaymentType.CASH,
    )
    reference_number = Column(String(100), nullable=True)
    notes = Column(Text, nullable=True)
    # Opaque reference to an uploaded receipt image
    image_path = Column(String(500), nullable=True)
    recorded_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    seller = relationship("Seller", back_populates="payments")

    @property
    def seller_name(self):
        return self.seller.name if self.seller else None


class PendingAmount(Base, BaseMixin):
    """
    Manually tracked amount owed to a seller but not yet paid.

    Not derived from sales or payments; the operator records and settles
    these by hand.
    """
    __tablename__ = "pending_amounts"

    seller_id = Column(Uuid(as_uuid=True), ForeignKey("sellers.id", ondelete="CASCADE"), nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    due_date = Column(Date, nullable=True)
    description = Column(Text, nullable=True)
    status = Column(
        Enum(PendingStatus, name="pending_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=PendingStatus.PENDING,
        index=True,
    )

    # Relationships
    seller = relationship("Seller", back_populates="pending_amounts")

    @property
    def seller_name(self):
        return self.seller.name if self.seller else None
