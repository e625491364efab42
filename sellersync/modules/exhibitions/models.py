from sellersync.database.database import Base
from sqlalchemy import Column, String, Date, Enum, Text
from sqlalchemy.orm import relationship
from sellersync.common.mixins import BaseMixin
import enum


class ExhibitionStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


class Exhibition(Base, BaseMixin):
    """Time-boxed sales event. Sales reference it weakly."""
    __tablename__ = "exhibitions"

    name = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    notes = Column(Text, nullable=True)
    status = Column(
        Enum(ExhibitionStatus, name="exhibition_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=ExhibitionStatus.UPCOMING,
        index=True,
    )

    # Deleting an exhibition detaches its sales, never deletes them
    sales = relationship("Sale", back_populates="exhibition", passive_deletes=True)
