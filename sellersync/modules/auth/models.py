from sqlalchemy import Column, String, Boolean, DateTime
from sellersync.database.database import Base
from sellersync.common.mixins import BaseMixin


class User(Base, BaseMixin):
    __tablename__ = "users"

    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    full_name = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    role = Column(String(20), nullable=False, default="viewer")  # admin, manager, viewer
    is_active = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
