"""
Database connection and session management for Eventboard.
"""

import logging
from typing import Any, Dict, Generator, Optional
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models.event import Base
# Registers the remaining tables on Base.metadata
from ..models import interest, feedback  # noqa: F401

logger = logging.getLogger(__name__)


class DatabaseConnection:
    """
    Database connection manager for Eventboard.
    Created by the application lifespan and disposed on shutdown.
    """

    def __init__(self):
        self.engine: Optional[Engine] = None
        self.SessionLocal = None
        self._initialized = False

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self, database_url: str, pool_config: Optional[Dict[str, Any]] = None):
        """
        Initialize database connection.

        Args:
            database_url: Database connection URL
            pool_config: Pool sizing options, ignored for SQLite
        """
        pool_config = pool_config or {}
        try:
            if database_url.startswith("sqlite"):
                self.engine = create_engine(
                    database_url,
                    connect_args={"check_same_thread": False},
                    poolclass=StaticPool,
                    echo=False
                )
            else:
                self.engine = create_engine(
                    database_url,
                    pool_size=pool_config.get("pool_size", 5),
                    max_overflow=pool_config.get("max_overflow", 10),
                    pool_timeout=pool_config.get("pool_timeout", 30),
                    pool_recycle=pool_config.get("pool_recycle", 300),
                    pool_pre_ping=True,
                    echo=False
                )

            self.SessionLocal = sessionmaker(
                autocommit=False,
                autoflush=False,
                expire_on_commit=False,
                bind=self.engine
            )

            self._initialized = True
            logger.info("Database connection initialized successfully")

        except Exception as e:
            logger.error(f"Failed to initialize database connection: {e}")
            raise

    def get_session(self) -> Generator[Session, None, None]:
        """
        Get database session.

        Yields:
            SQLAlchemy database session
        """
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        session = self.SessionLocal()
        try:
            yield session
        finally:
            session.close()

    def create_tables(self):
        """Create all database tables."""
        if not self._initialized:
            raise RuntimeError("Database not initialized")

        try:
            Base.metadata.create_all(bind=self.engine)
            logger.info("Database tables created successfully")
        except Exception as e:
            logger.error(f"Failed to create database tables: {e}")
            raise

    def health_check(self) -> bool:
        """
        Check database health.

        Returns:
            True if database is healthy
        """
        if not self._initialized:
            return False

        try:
            session = self.SessionLocal()
            try:
                session.execute(text("SELECT 1"))
                return True
            finally:
                session.close()
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    def close(self):
        """Dispose of the connection pool."""
        if self.engine is not None:
            self.engine.dispose()
            logger.info("Database connections closed")
        self._initialized = False
