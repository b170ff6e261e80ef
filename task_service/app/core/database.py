import logging
from typing import Generator, Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text, Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import QueuePool, StaticPool

from ..models.mapping import map_entities, metadata

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one running service."""

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self.engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker] = None

    def connect(self) -> None:
        """Map entities, open the connection pool and create missing tables."""
        map_entities()

        if self.url.startswith("sqlite"):
            # One shared connection so in-memory databases survive across sessions
            self.engine = create_engine(
                self.url,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
                echo=self.echo,
            )
        else:
            self.engine = create_engine(
                self.url,
                poolclass=QueuePool,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,
                pool_recycle=300,
                echo=self.echo,
            )

        event.listen(self.engine, "connect", _on_connect)

        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )

        metadata.create_all(bind=self.engine)
        logger.info("Database tables created successfully")

    def session(self) -> Session:
        if self.session_factory is None:
            raise RuntimeError("Database is not connected")
        return self.session_factory()

    def check_connection(self) -> bool:
        """
        Check database connectivity

        Returns:
            bool: True if connected, False otherwise
        """
        if self.engine is None:
            return False
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(f"Database connection check failed: {e}")
            return False

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database connection pool disposed")


def _on_connect(dbapi_connection, connection_record):
    """Event listener for database connections"""
    logger.info("Database connection established")


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database dependency for FastAPI

    Yields:
        Session: Database session bound to the app's Database
    """
    db = request.app.state.database.session()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
