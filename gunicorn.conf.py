"""Gunicorn config for the Reading Recap API (gunicorn -c gunicorn.conf.py recap.main:app)."""
import os

# Bind to the platform's PORT or default 8000
bind = f"0.0.0.0:{os.environ.get('PORT', '8000')}"

# Uvicorn async workers. The uploaded library lives in worker memory, so keep
# a single worker unless uploads are routed to a shared store.
worker_class = "uvicorn.workers.UvicornWorker"
workers = int(os.environ.get("WEB_CONCURRENCY", "1"))
wsgi_app = "recap.main:app"

timeout = 60

# Graceful timeout for shutdown
graceful_timeout = 30

# Keep-alive: must exceed the proxy keep-alive (default 60s)
keepalive = 65

# Logging
accesslog = "-"
errorlog = "-"
loglevel = "info"
