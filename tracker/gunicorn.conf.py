"""
Gunicorn configuration for the task tracker API.

Port and request timeout come from config.settings (PORT, REQUEST_TIMEOUT)
so the dev server and gunicorn agree.

Usage:
    gunicorn -c tracker/gunicorn.conf.py "tracker.app:create_app()"
"""

import multiprocessing
import os

from config.settings import get_settings

_settings = get_settings()

bind = os.getenv("GUNICORN_BIND", f"0.0.0.0:{_settings.port}")
workers = int(os.getenv("GUNICORN_WORKERS", multiprocessing.cpu_count() * 2 + 1))
worker_class = "sync"

# Requests running longer than this are killed and the worker restarted
timeout = _settings.request_timeout
graceful_timeout = _settings.request_timeout
keepalive = 5

# Worker recycling
max_requests = 1000
max_requests_jitter = 50

accesslog = "-"
errorlog = "-"
loglevel = _settings.log_level.lower()

proc_name = "task-tracker-api"
