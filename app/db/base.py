from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings


def _engine_kwargs(database_url: str) -> dict:
    if database_url.startswith('sqlite'):
        # one shared connection so an in-memory database survives across sessions
        return {'connect_args': {'check_same_thread': False}, 'poolclass': StaticPool}
    return {'pool_pre_ping': True}


engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
