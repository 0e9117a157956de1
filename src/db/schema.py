"""Database tables / schema"""

import time

from sqlalchemy import JSON, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def epoch_now() -> float:
    return time.time()


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[str] = mapped_column(primary_key=True)
    # Full serialized GameModel (camelCase JSON)
    state: Mapped[dict] = mapped_column(JSON)
    # Seconds since the epoch after which the record no longer exists
    expires_at: Mapped[float]
    updated_at: Mapped[float] = mapped_column(default=epoch_now, onupdate=epoch_now)


class DBSession(Base):
    __tablename__ = "sessions"
    session_id: Mapped[str] = mapped_column(primary_key=True)
    game_id: Mapped[str]

    __table_args__ = (Index("ix_sessions_game_id", "game_id"),)
