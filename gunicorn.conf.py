"""
Gunicorn configuration for the HabitLab server.

Env vars that override defaults:
  PORT    : TCP port to bind (default: 8000)
  WORKERS : number of worker processes (default: 1)
"""
import os

bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# The habit collection is a single-writer blob guarded by an in-process lock.
# More than one worker process would let writes interleave.
workers = int(os.environ.get("WORKERS", "1"))

# Each worker runs Uvicorn's ASGI event loop inside Gunicorn's process manager.
worker_class = "uvicorn.workers.UvicornWorker"

keepalive = 5

# Kill a worker that hasn't responded in 120 s.
timeout = 120

# stdout only; app logs share the stream (see habitlab/core/logging.py)
loglevel = "info"
accesslog = "-"
errorlog = "-"
access_log_format = '%(h)s "%(r)s" %(s)s %(b)sB %(D)sµs'

graceful_timeout = 30

wsgi_app = "habitlab.main:app"
