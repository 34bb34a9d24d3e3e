from __future__ import annotations

import uuid
import datetime as dt
from datetime import datetime

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):
    """Declarative base for the content models."""


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )


class Surah(Base, TimestampMixin):
    __tablename__ = "surahs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    latin_name: Mapped[str] = mapped_column(String(255), nullable=False)
    verse_count: Mapped[int] = mapped_column(Integer, nullable=False)
    revelation_place: Mapped[str] = mapped_column(String(64), nullable=False)
    meaning: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    audio_full: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    verses: Mapped[list["Verse"]] = relationship(
        "Verse",
        back_populates="surah",
        order_by="Verse.number",
    )


class Verse(Base, TimestampMixin):
    __tablename__ = "verses"
    __table_args__ = (
        UniqueConstraint("surah_number", "number", name="uq_verses_surah_number_number"),
        Index("ix_verses_juz", "juz"),
        Index("ix_verses_surah_number_juz", "surah_number", "juz"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    surah_number: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("surahs.number", ondelete="RESTRICT"),
        nullable=False,
    )
    number: Mapped[int] = mapped_column(Integer, nullable=False)
    # Derived from the juz table at import time; never edited independently.
    juz: Mapped[int] = mapped_column(Integer, nullable=False)
    arabic: Mapped[str] = mapped_column(Text, nullable=False)
    latin: Mapped[str] = mapped_column(Text, nullable=False)
    translation: Mapped[str] = mapped_column(Text, nullable=False)
    audio: Mapped[dict | None] = mapped_column(JSONB, nullable=True)

    surah: Mapped["Surah"] = relationship("Surah", back_populates="verses")


class Tafsir(Base, TimestampMixin):
    __tablename__ = "tafsirs"
    __table_args__ = (
        UniqueConstraint(
            "surah_number",
            "verse_number",
            name="uq_tafsirs_surah_number_verse_number",
        ),
        ForeignKeyConstraint(
            ["surah_number", "verse_number"],
            ["verses.surah_number", "verses.number"],
            ondelete="RESTRICT",
        ),
        Index("ix_tafsirs_surah_number", "surah_number"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    surah_number: Mapped[int] = mapped_column(Integer, nullable=False)
    verse_number: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)


class Doa(Base, TimestampMixin):
    __tablename__ = "doas"
    __table_args__ = (
        UniqueConstraint("name", "description", name="uq_doas_name_description"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    api_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    group: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[str] = mapped_column(String(512), nullable=False)
    arabic: Mapped[str] = mapped_column(Text, nullable=False)
    latin: Mapped[str] = mapped_column(Text, nullable=False)
    meaning: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSONB, nullable=False, default=list)


class EndpointHit(Base):
    __tablename__ = "analytics"
    __table_args__ = (
        UniqueConstraint("endpoint", "method", name="uq_analytics_endpoint_method"),
        Index("ix_analytics_endpoint", "endpoint"),
        Index("ix_analytics_last_hit", "last_hit"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    endpoint: Mapped[str] = mapped_column(String(512), nullable=False)
    method: Mapped[str] = mapped_column(String(16), nullable=False)
    hit_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    last_hit: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )


class DailyStats(Base):
    __tablename__ = "daily_stats"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    date: Mapped[dt.date] = mapped_column(Date, unique=True, nullable=False)
    total_hits: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=datetime.utcnow,
        nullable=False,
    )
