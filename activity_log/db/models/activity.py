from typing import Optional

from sqlalchemy import ForeignKeyConstraint, Integer, PrimaryKeyConstraint, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from activity_log.core.utils.enums.activity_priority_enum import ActivityPriority
from activity_log.db.base import Base


class ActivitySystemModel(Base):
    __tablename__ = 'activity_system'
    __table_args__ = (
        ForeignKeyConstraint(['admin_id'], ['admin.id'], name='activity_system_admin_id_fk'),
        ForeignKeyConstraint(['client_id'], ['client.id'], name='activity_system_client_id_fk'),
        PrimaryKeyConstraint('id', name='activity_system_pkey'),
    )

    priority: Mapped[int] = mapped_column(Integer, default=int(ActivityPriority.INFO), index=True)
    admin_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    client_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    message: Mapped[Optional[str]] = mapped_column(Text)
    ip: Mapped[Optional[str]] = mapped_column(String(45))


class ActivityClientEmailModel(Base):
    __tablename__ = 'activity_client_email'
    __table_args__ = (
        ForeignKeyConstraint(['client_id'], ['client.id'], name='activity_client_email_client_id_fk'),
        PrimaryKeyConstraint('id', name='activity_client_email_pkey'),
    )

    client_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    sender: Mapped[Optional[str]] = mapped_column(String(255))
    recipients: Mapped[Optional[str]] = mapped_column(Text)
    subject: Mapped[Optional[str]] = mapped_column(String(255))
    content_html: Mapped[Optional[str]] = mapped_column(Text)
    content_text: Mapped[Optional[str]] = mapped_column(Text)


class ActivityClientHistoryModel(Base):
    __tablename__ = 'activity_client_history'
    __table_args__ = (
        ForeignKeyConstraint(['client_id'], ['client.id'], name='activity_client_history_client_id_fk'),
        PrimaryKeyConstraint('id', name='activity_client_history_pkey'),
    )

    client_id: Mapped[int] = mapped_column(Integer, index=True)
    ip: Mapped[Optional[str]] = mapped_column(String(45))
