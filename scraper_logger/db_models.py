from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.dialects.mysql import LONGTEXT
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class ScraperExecutionLog(Base):
    __tablename__ = "scraper_execution_logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    script_id: Mapped[int] = mapped_column(Integer, index=True)
    execution_mode: Mapped[str] = mapped_column(String(32))
    status: Mapped[str] = mapped_column(String(16))
    items_processed: Mapped[int] = mapped_column(Integer, default=0)
    pixel_new: Mapped[int] = mapped_column(Integer, default=0)
    pixel_duplicates: Mapped[int] = mapped_column(Integer, default=0)
    pixel_updated: Mapped[int] = mapped_column(Integer, default=0)
    event_summary: Mapped[str] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())


class ScraperExecutionLogV2(Base):
    __tablename__ = "scraper_execution_logs_v2"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    script_id: Mapped[int] = mapped_column(Integer, index=True)
    execution_mode: Mapped[str] = mapped_column(String(32))
    execution_type: Mapped[str] = mapped_column(String(16))
    workflow_name: Mapped[str] = mapped_column(String(255))
    status: Mapped[str] = mapped_column(String(16))
    items_processed: Mapped[int] = mapped_column(Integer, default=0)
    pixel_new: Mapped[int] = mapped_column(Integer, default=0)
    pixel_duplicates: Mapped[int] = mapped_column(Integer, default=0)
    pixel_updated: Mapped[int] = mapped_column(Integer, default=0)
    event_summary: Mapped[str] = mapped_column(Text)
    # No size bound on the stored raw item.
    full_details: Mapped[str] = mapped_column(Text().with_variant(LONGTEXT(), "mysql"))
    created_at: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())
