"""
Database engine configuration.
"""
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from app.services.config_service import config_service

logger = logging.getLogger("app.database")


def create_database_engine() -> Engine:
    """
    Create and configure SQLAlchemy engine.

    SQLite is the default backend; any SQLAlchemy URL can be supplied via DB_URL.

    Returns:
        Configured SQLAlchemy engine
    """
    database_url = config_service.get_setting("DB_URL", "sqlite:///./plagiarism.db")
    echo = str(config_service.get_setting("DB_ECHO", "false")).lower() == "true"

    logger.info(f"Creating database engine for: {database_url.split('@')[1] if '@' in database_url else database_url}")

    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False}, echo=echo)

    return create_engine(
        database_url,
        # Connection pool settings
        pool_size=10,
        max_overflow=20,
        pool_pre_ping=True,
        pool_recycle=3600,
        echo=echo,
    )


# Global engine instance
engine = create_database_engine()
