from sellersync.database.database import Base
from sqlalchemy import Column, String, Numeric, Enum, Text
from sqlalchemy.orm import relationship
from sellersync.common.mixins import BaseMixin
import enum


class SellerStatus(str, enum.Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Seller(Base, BaseMixin):
    """
    Consignor supplying items for resale.

    ``initial_balance`` is what the business owed the seller before any
    payment was recorded; it may be negative.
    """
    __tablename__ = "sellers"

    name = Column(String(255), nullable=False, index=True)
    location = Column(String(255), nullable=True)
    contact_person = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    email = Column(String(255), nullable=True)
    initial_balance = Column(Numeric(12, 2), nullable=False, default=0)
    notes = Column(Text, nullable=True)
    status = Column(
        Enum(SellerStatus, name="seller_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SellerStatus.ACTIVE,
    )

    # Relationships
    stock_items = relationship("StockItem", back_populates="seller", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="seller", cascade="all, delete-orphan")
    pending_amounts = relationship("PendingAmount", back_populates="seller", cascade="all, delete-orphan")
