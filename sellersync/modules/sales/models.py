from sellersync.database.database import Base
from sqlalchemy import Column, Date, ForeignKey, Numeric, Enum, Text, Uuid
from sqlalchemy.orm import relationship
from sellersync.common.mixins import BaseMixin
import enum


class SalePaymentMethod(str, enum.Enum):
    CASH = "cash"
    ONLINE = "online"


class Sale(Base, BaseMixin):
    """
    The sale of exactly one stock item.

    Rows are only inserted and deleted by the inventory lifecycle manager so
    the referenced item's status flips in the same transaction.
    """
    __tablename__ = "sales"

    stock_item_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("stock_items.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    selling_price = Column(Numeric(12, 2), nullable=False)
    payment_method = Column(
        Enum(SalePaymentMethod, name="sale_payment_method", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SalePaymentMethod.CASH,
    )
    sale_date = Column(Date, nullable=False, index=True)
    notes = Column(Text, nullable=True)
    exhibition_id = Column(Uuid(as_uuid=True), ForeignKey("exhibitions.id", ondelete="SET NULL"), nullable=True, index=True)
    recorded_by = Column(Uuid(as_uuid=True), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    # Relationships
    stock_item = relationship("StockItem", back_populates="sale")
    exhibition = relationship("Exhibition", back_populates="sales")
