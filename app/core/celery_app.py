"""
Celery configuration for async task processing.
"""

from celery import Celery

from app.core.config import REDIS_URL

# Create Celery app
celery_app = Celery(
    "intramural_scheduler",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=["app.tasks.scheduler_tasks"]
)

# Celery configuration
celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    task_track_started=True,
    task_time_limit=300,  # 5 minutes max
    task_soft_time_limit=240,
    worker_prefetch_multiplier=1,
    worker_max_tasks_per_child=50,
)
