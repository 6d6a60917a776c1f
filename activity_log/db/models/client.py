from typing import Optional

from sqlalchemy import PrimaryKeyConstraint, String
from sqlalchemy.orm import Mapped, mapped_column

from activity_log.db.base import Base


class ClientModel(Base):
    __tablename__ = 'client'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='client_pkey'),
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100))
    last_name: Mapped[Optional[str]] = mapped_column(String(100))
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True)


class AdminModel(Base):
    __tablename__ = 'admin'
    __table_args__ = (
        PrimaryKeyConstraint('id', name='admin_pkey'),
    )

    name: Mapped[Optional[str]] = mapped_column(String(255))
    email: Mapped[Optional[str]] = mapped_column(String(255), index=True)
