"""Gunicorn configuration for the fleet desk app server."""
import multiprocessing
import os

wsgi_app = "fleetdesk.wsgi:application"
bind = os.environ.get("FLEETDESK_BIND", "127.0.0.1:8000")
workers = int(os.environ.get("WEB_CONCURRENCY", min(multiprocessing.cpu_count() * 2 + 1, 4)))
worker_class = "gthread"
threads = int(os.environ.get("FLEETDESK_THREADS", "2"))
timeout = 60
keepalive = 5
max_requests = 1000
max_requests_jitter = 50
accesslog = "-"
errorlog = "-"
loglevel = os.environ.get("FLEETDESK_LOG_LEVEL", "info").lower()
