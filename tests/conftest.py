"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.shared_types import Color
from src.db.schema import Base
from src.ludo.game import Game

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)

# One session per color, seated in the order of the Color enum
SESSIONS: dict[Color, str] = {color: f"session-{color}" for color in Color}


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        Base.metadata.drop_all(bind=engine)
        db.close()


@pytest.fixture
def ready_game() -> Game:
    """Four players seated red, green, yellow, blue, each holding their own color. Red is to roll."""
    game = Game.new_game(SESSIONS[Color.RED], game_id="9c5b94b1-35ad-49bb-b118-8e8fc24abf80")
    for color in [Color.GREEN, Color.YELLOW, Color.BLUE]:
        game.add_player(SESSIONS[color])
    for color in Color:
        game.choose_color(SESSIONS[color], color)
    return game
