# mementogram/db/session.py

import logging
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from mementogram.core.config import settings

logger = logging.getLogger(__name__)

SQLALCHEMY_DATABASE_URL = settings.DATABASE_URL


def make_engine(url: str, **kwargs) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    db_engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True, **kwargs)

    @event.listens_for(db_engine, "connect")
    def connect(dbapi_connection, connection_record):
        if db_engine.dialect.name == "sqlite":
            # SQLite ignores ON DELETE CASCADE unless this is switched on per connection
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()
        logger.info("Database connection established")

    @event.listens_for(db_engine, "close")
    def close(dbapi_connection, connection_record):
        logger.info("Database connection closed")

    return db_engine


engine = make_engine(SQLALCHEMY_DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
