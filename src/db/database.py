"""Generate database sessions"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, scoped_session, sessionmaker

from src.db.schema import Base


def make_engine(database_url: str) -> Engine:
    """Engine with all tables created."""
    connect_args = (
        {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    )
    engine = create_engine(database_url, connect_args=connect_args)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def make_session(engine: Engine) -> scoped_session[Session]:
    """Thread-local sessions: games handled on different threads never share a Session."""
    return scoped_session(sessionmaker(bind=engine, autoflush=False))
