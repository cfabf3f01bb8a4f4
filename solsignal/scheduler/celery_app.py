"""
Celery application configuration.
"""
from celery import Celery
from celery.schedules import crontab
from config.settings import get_settings

settings = get_settings()

# Create Celery app
app = Celery(
    'solsignal',
    broker=f'redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}/0',
    backend=f'redis://{settings.REDIS_HOST}:{settings.REDIS_PORT}/0',
    include=['solsignal.scheduler.tasks']
)

# Celery configuration
app.conf.update(
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,
    task_track_started=True,
    task_time_limit=5 * 60,
    worker_prefetch_multiplier=1,
)

# Schedule configuration
app.conf.beat_schedule = {
    'prune-signals': {
        'task': 'solsignal.scheduler.tasks.prune_signals',
        'schedule': crontab(minute='*/15'),
    },
}

if __name__ == '__main__':
    app.start()
