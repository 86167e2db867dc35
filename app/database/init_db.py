"""
Database initialization script.
"""
import logging

from sqlmodel import SQLModel

from app.database.engine import engine

logger = logging.getLogger("app.database")


def init_database() -> None:
    """
    Create all tables if they do not exist yet.
    """
    logger.info("Initializing database...")

    # Register table models on the metadata
    from app.models.submission import Submission  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info("Database tables created")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
