"""
Database configuration and connection pooling
"""
import logging
import time

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import QueuePool

from marketplace.config import settings

logger = logging.getLogger(__name__)

# Disable verbose SQLAlchemy logs
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

SLOW_QUERY_SECONDS = 1.0


def _engine_options(url: str) -> dict:
    """Pool options for the configured backend"""
    if url.startswith("sqlite"):
        # One connection shared across FastAPI's worker threads
        return {"connect_args": {"check_same_thread": False}}

    return {
        "poolclass": QueuePool,
        "pool_size": settings.POOL_SIZE,
        "max_overflow": settings.MAX_OVERFLOW,
        "pool_timeout": settings.POOL_TIMEOUT,
        "pool_recycle": settings.POOL_RECYCLE,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,
    **_engine_options(settings.DATABASE_URL),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Statistics tracking
query_stats = {
    "total_queries": 0,
    "slow_queries": 0,
}


@event.listens_for(engine, "before_cursor_execute")
def receive_before_cursor_execute(conn, cursor, statement, params, context, executemany):
    """Track query start time"""
    conn.info.setdefault("query_start_time", []).append(time.time())


@event.listens_for(engine, "after_cursor_execute")
def receive_after_cursor_execute(conn, cursor, statement, params, context, executemany):
    """Track query completion"""
    total_time = time.time() - conn.info["query_start_time"].pop()
    query_stats["total_queries"] += 1

    if total_time > SLOW_QUERY_SECONDS:
        query_stats["slow_queries"] += 1
        logger.warning(
            f"Slow query ({total_time:.3f}s): {statement[:100]}",
            extra={"duration_ms": round(total_time * 1000, 2)},
        )


def init_db():
    """Create tables for all models"""
    from marketplace.models import Base

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def get_db():
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_query_stats():
    """Get query statistics"""
    return query_stats.copy()


def check_database_health() -> bool:
    """Check database connection"""
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        return False
