import time
from typing import Generator

import structlog
from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from ..config import get_settings

logger = structlog.get_logger(__name__)

settings = get_settings()

if settings.database_url.startswith("sqlite"):
    engine = create_engine(
        settings.database_url,
        echo=settings.debug,
        connect_args={"check_same_thread": False}
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        pool_recycle=300,
        echo=settings.debug
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


@event.listens_for(engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    if settings.database_url.startswith("sqlite"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def wait_for_database(max_retries: int = 30, initial_delay: float = 1.0, max_delay: float = 10.0) -> None:
    """Block until the database answers a ping, backing off between attempts."""
    delay = initial_delay
    for attempt in range(1, max_retries + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.info("Database connection established", attempt=attempt)
            return
        except Exception as e:
            logger.warning("Database connection attempt failed", attempt=attempt, error=str(e))
            if attempt == max_retries:
                raise
            time.sleep(delay)
            delay = min(delay * 1.5, max_delay)


def create_tables():
    # Import models to register them with Base
    from ..models import user, news
    Base.metadata.create_all(bind=engine)
