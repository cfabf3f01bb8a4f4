"""
Health check endpoints.
"""
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
import redis

from config.settings import get_settings
from solsignal.errors import StoreError
from solsignal.store import SignalStore, get_signal_store

router = APIRouter()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@router.get("/health")
def health_check(store: SignalStore = Depends(get_signal_store)):
    """
    Health check endpoint.
    Verifies signal store connectivity.
    """
    try:
        store.ping()
        return {
            "status": "healthy",
            "timestamp": _now(),
            "store": store.backend,
            "signals": store.count(),
        }
    except StoreError as e:
        return {
            "status": "unhealthy",
            "timestamp": _now(),
            "store": store.backend,
            "error": e.details,
        }


@router.get("/celery/status")
def celery_status():
    """
    Celery worker status endpoint.
    Checks broker connectivity and stored task results.
    """
    settings = get_settings()
    try:
        r = redis.Redis(host=settings.REDIS_HOST, port=settings.REDIS_PORT,
                        decode_responses=True, socket_timeout=2)
        r.ping()
        task_results = len(r.keys('celery-task-meta-*'))
        return {
            "status": "healthy" if task_results else "idle",
            "broker": "connected",
            "task_results": task_results,
            "timestamp": _now(),
        }
    except redis.RedisError as e:
        return {
            "status": "unhealthy",
            "broker": "disconnected",
            "timestamp": _now(),
            "error": str(e),
        }
