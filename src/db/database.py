"""Generate database session"""

from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import load_settings
from src.db.schema import Base


def create_db_engine(database_url: Optional[str] = None) -> Engine:
    """Engine for the configured database. Ensures all tables are created."""
    url = database_url or load_settings().database_url
    # debounced saves are written from a timer thread
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args)
    Base.metadata.create_all(bind=engine)
    return engine


def get_db(engine: Engine) -> Generator[Session, None, None]:
    session_factory = sessionmaker(bind=engine)
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
