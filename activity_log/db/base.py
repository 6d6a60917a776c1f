from datetime import datetime, timezone
from sqlalchemy import Column, DateTime, Integer, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class TimestampMixin:
    created_at = Column(DateTime(timezone=True),
                        default=lambda: datetime.now(timezone.utc),
                        server_default=text('CURRENT_TIMESTAMP'))

    updated_at = Column(DateTime(timezone=True),
                        default=lambda: datetime.now(timezone.utc),
                        server_default=text('CURRENT_TIMESTAMP'),
                        onupdate=lambda: datetime.now(timezone.utc))


class Base(DeclarativeBase, TimestampMixin):
    abstract = True
    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True, sort_order=-1)
