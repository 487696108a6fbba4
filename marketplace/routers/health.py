"""
Health check and statistics endpoints
"""
from datetime import datetime

from fastapi import APIRouter

from marketplace.database import check_database_health, get_query_stats
from marketplace.services import cache_service

router = APIRouter(tags=["health"])


@router.get("/health")
def health_check():
    """Health check endpoint"""
    db_healthy = check_database_health()

    if cache_service.enabled:
        cache_status = "up" if cache_service.ping() else "down"
    else:
        cache_status = "disabled"

    return {
        "status": "healthy" if db_healthy and cache_status != "down" else "degraded",
        "timestamp": datetime.utcnow().isoformat(),
        "database": "up" if db_healthy else "down",
        "cache": cache_status,
    }


@router.get("/stats/queries")
def get_query_statistics():
    """Get query execution statistics"""
    stats = get_query_stats()

    total = stats["total_queries"]
    slow = stats["slow_queries"]

    return {
        **stats,
        "slow_query_percentage": round((slow / total * 100) if total > 0 else 0, 2)
    }
