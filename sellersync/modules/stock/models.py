from sellersync.database.database import Base
from sqlalchemy import Column, String, ForeignKey, Numeric, Enum, Uuid
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship

from sellersync.common.mixins import BaseMixin
from sellersync.modules.stock.state_machine import StockStatus, StockLifecycle, LifecycleEvent


class StockItem(Base, BaseMixin):
    """
    A single consigned item supplied by a seller.

    ``status`` is read-only: the column is only written through ``apply``,
    which consults the lifecycle transition table.
    """
    __tablename__ = "stock_items"

    seller_id = Column(Uuid(as_uuid=True), ForeignKey("sellers.id", ondelete="CASCADE"), nullable=False, index=True)
    item_name = Column(String(255), nullable=False)
    cost_price = Column(Numeric(12, 2), nullable=False)
    _status = Column(
        "status",
        Enum(StockStatus, name="stock_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=StockLifecycle.INITIAL,
        index=True,
    )

    # Relationships
    seller = relationship("Seller", back_populates="stock_items")
    sale = relationship("Sale", back_populates="stock_item", uselist=False, cascade="all, delete-orphan")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._status = StockLifecycle.INITIAL

    @hybrid_property
    def status(self):
        return self._status

    def apply(self, event: LifecycleEvent) -> StockStatus:
        """Move to the next lifecycle state or raise ConflictStateError."""
        self._status = StockLifecycle.next_state(self._status, event)
        return self._status

    @property
    def seller_name(self):
        return self.seller.name if self.seller else None
