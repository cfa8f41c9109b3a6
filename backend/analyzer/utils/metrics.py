"""Prometheus metrics configuration"""

from prometheus_client import Counter, Histogram, Info
from prometheus_fastapi_instrumentator import Instrumentator
from typing import Callable
import time
from functools import wraps

from ..config import settings

app_info = Info('event_analyzer', 'Event Analyzer Information')
app_info.info({
    'version': settings.VERSION,
    'service': settings.SERVICE_NAME
})

# Recommendation metrics
recommendations_generated_total = Counter(
    'recommendations_generated_total',
    'Total recommended events emitted',
    ['operation']
)

recommendation_generation_duration_seconds = Histogram(
    'recommendation_generation_duration_seconds',
    'Time taken to serve a recommendation operation',
    ['operation']
)

# Database metrics
db_query_duration_seconds = Histogram(
    'db_query_duration_seconds',
    'Database query duration in seconds',
    ['query_type']
)


def setup_metrics(app):
    """
    Setup Prometheus metrics for FastAPI app

    Args:
        app: FastAPI application instance
    """
    instrumentator = Instrumentator(
        should_group_status_codes=False,
        should_ignore_untemplated=True,
        should_respect_env_var=True,
        should_instrument_requests_inprogress=True,
        excluded_handlers=["/metrics"],
        env_var_name="ENABLE_METRICS",
        inprogress_name="http_requests_inprogress",
        inprogress_labels=True
    )

    instrumentator.instrument(app).expose(app, endpoint="/metrics")

    return instrumentator


def _timed(histogram: Histogram, **labels):
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                return func(*args, **kwargs)
            finally:
                histogram.labels(**labels).observe(time.time() - start_time)

        return wrapper

    return decorator


def track_recommendation_time(operation: str):
    """
    Decorator to track how long a recommendation operation takes

    Usage:
        @track_recommendation_time("similar_events")
        def get_similar_events(...):
            pass
    """
    return _timed(recommendation_generation_duration_seconds, operation=operation)


def track_db_query(query_type: str):
    """
    Decorator to track database query time

    Usage:
        @track_db_query("actions_by_user")
        def top_by_user(...):
            pass
    """
    return _timed(db_query_duration_seconds, query_type=query_type)


def record_recommendation(operation: str, count: int = 1):
    """Record emitted recommendations"""
    recommendations_generated_total.labels(operation=operation).inc(count)
