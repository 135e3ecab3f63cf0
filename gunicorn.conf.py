"""
Gunicorn configuration for the Impulse Journal API.

Env vars that override defaults:
  PORT     - TCP port to bind
  WORKERS  - number of worker processes (default: 2)
  GUNICORN_TIMEOUT - seconds before a silent worker is killed (default: 120)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '3000')}"

workers = int(os.environ.get("WORKERS", "2"))

# Uvicorn's ASGI loop inside Gunicorn's process manager. Route handlers are
# sync, so the blocking AI calls run in each worker's threadpool.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Must exceed OPENAI_TIMEOUT_SECONDS * (OPENAI_MAX_RETRIES + 1), or report
# generation gets killed mid-call.
timeout = int(os.environ.get("GUNICORN_TIMEOUT", "120"))

# stdout only; app loggers share the same stream (app/core/logging.py).
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30
