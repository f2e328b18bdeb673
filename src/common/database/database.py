import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from src.common.config import settings
from src.common.store.document_store import DocumentStore
from src.common.store.sql_store import SqlDocumentStore
from src.models.models import Base

logger = logging.getLogger(__name__)

# SQLAlchemy async engine and session setup
engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    future=True,
    pool_pre_ping=True,
    pool_recycle=1800,
)

async_session = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False
)

document_store = SqlDocumentStore(async_session)

async def connect_to_db():
    """Connect to the database and make sure the document table exists."""
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database connected successfully")
    except Exception:
        logger.exception("Error connecting to the database")
        raise

async def close_db_connection():
    """Close the database connection."""
    try:
        await engine.dispose()
        logger.info("Database connection closed")
    except Exception:
        logger.exception("Error closing the database connection")
        raise

# Dependency for using the document store in routes
async def get_document_store() -> DocumentStore:
    """Return the process-wide document store."""
    return document_store
