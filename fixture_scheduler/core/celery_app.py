"""
Celery app used by POST /api/fixtures/async.
Results are JSON FixtureResponse dicts stored in Redis.
"""

from celery import Celery

from fixture_scheduler.core.config import (
    REDIS_URL, TASK_SOFT_TIME_LIMIT_SECONDS, TASK_TIME_LIMIT_SECONDS
)

celery_app = Celery(
    "fixture_scheduler",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["fixture_scheduler.tasks.fixture_tasks"]
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="Africa/Nairobi",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=TASK_TIME_LIMIT_SECONDS,
    task_soft_time_limit=TASK_SOFT_TIME_LIMIT_SECONDS,
    # one CP-SAT run at a time per worker process
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)
