"""ORM models for the check-in, reward, quest, lottery and shop tables.

Column types carry SQLite variants so the same metadata builds an in-memory
schema for the test suite; production runs on PostgreSQL via the Alembic
revisions in ``alembic/versions``.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from officing.db.base import Base

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
BigIntPK = BigInteger().with_variant(Integer(), "sqlite")
JSONType = JSON().with_variant(JSONB(), "postgresql")

USER_ID_LENGTH = 64


# ---------------------------------------------------------------------------
# Catalogs
# ---------------------------------------------------------------------------


class Title(Base):
    """Achievement catalog entry."""

    __tablename__ = "titles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    unlock_condition_type: Mapped[str] = mapped_column(String(32), nullable=False)
    unlock_condition_value: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Quest(Base):
    """Quest catalog entry."""

    __tablename__ = "quests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rank: Mapped[str] = mapped_column(String(1), nullable=False)
    base_xp: Mapped[int] = mapped_column(Integer, nullable=False)
    base_points: Mapped[int] = mapped_column(Integer, nullable=False)
    quest_type: Mapped[str] = mapped_column(String(16), nullable=False, default="daily")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Prize(Base):
    """Lottery prize catalog entry. ``stock`` NULL means unlimited."""

    __tablename__ = "prizes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rank: Mapped[str] = mapped_column(String(1), nullable=False)
    weight: Mapped[float] = mapped_column(Float, nullable=False)
    reward_type: Mapped[str] = mapped_column(String(16), nullable=False)
    reward_value: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    stock: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class ShopItem(Base):
    """Item purchasable with points."""

    __tablename__ = "shop_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cost: Mapped[int] = mapped_column(Integer, nullable=False)
    item_type: Mapped[str] = mapped_column(String(32), nullable=False)
    item_value: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False, default=dict)
    is_available: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


# ---------------------------------------------------------------------------
# Per-user state
# ---------------------------------------------------------------------------


class UserProgress(Base):
    """Denormalized level/points/streak/pity row, one per user."""

    __tablename__ = "user_progress"

    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), primary_key=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    current_xp: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active_title_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("titles.id", ondelete="SET NULL"), nullable=True
    )
    pity_counter: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Attendance(Base):
    """One check-in per user per calendar day. Immutable once written."""

    __tablename__ = "attendances"
    __table_args__ = (
        UniqueConstraint("user_id", "check_in_date", name="uq_attendances_user_date"),
        Index("idx_attendances_user_month", "user_id", "year", "month"),
        Index("idx_attendances_user_tag", "user_id", "tag"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    check_in_date: Mapped[date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    tag: Mapped[str] = mapped_column(String(64), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)


class LotteryTicket(Base):
    """Lottery ticket balance, one per user."""

    __tablename__ = "lottery_tickets"

    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), primary_key=True)
    ticket_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    earned_from: Mapped[str | None] = mapped_column(String(64), nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class UserQuestLog(Base):
    """A quest assigned to a user for one day. ``completed_at`` gates completion."""

    __tablename__ = "user_quest_logs"
    __table_args__ = (
        UniqueConstraint("user_id", "quest_id", "assigned_date", name="uq_user_quest_logs_user_quest_date"),
        Index("idx_user_quest_logs_user_date", "user_id", "assigned_date"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    quest_id: Mapped[int] = mapped_column(Integer, ForeignKey("quests.id"), nullable=False)
    assigned_date: Mapped[date] = mapped_column(Date, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    xp_earned: Mapped[int | None] = mapped_column(Integer, nullable=True)
    points_earned: Mapped[int | None] = mapped_column(Integer, nullable=True)

    quest: Mapped[Quest] = relationship("Quest", lazy="joined")


class UserTitle(Base):
    """Unlock marker. Presence of the row is the only unlock state."""

    __tablename__ = "user_titles"
    __table_args__ = (
        UniqueConstraint("user_id", "title_id", name="uq_user_titles_user_title"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    title_id: Mapped[int] = mapped_column(Integer, ForeignKey("titles.id", ondelete="CASCADE"), nullable=False)
    unlocked_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    title: Mapped[Title] = relationship("Title", lazy="joined")


class LotteryLog(Base):
    """Append-only draw audit trail."""

    __tablename__ = "lottery_log"
    __table_args__ = (
        Index("idx_lottery_log_user", "user_id"),
    )

    id: Mapped[int] = mapped_column(BigIntPK, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(USER_ID_LENGTH), nullable=False)
    prize_id: Mapped[int] = mapped_column(Integer, ForeignKey("prizes.id"), nullable=False)
    rank: Mapped[str] = mapped_column(String(1), nullable=False)
    pity_counter_at_draw: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
