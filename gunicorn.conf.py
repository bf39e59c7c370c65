"""
Gunicorn configuration for the bonus points plugin.
"""
import os

bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
workers = int(os.getenv('GUNICORN_WORKERS', '2'))
worker_class = 'sync'
timeout = 30
keepalive = 5

# Logging
accesslog = '-'  # stdout
errorlog = '-'   # stderr
loglevel = os.getenv('LOG_LEVEL', 'info').lower()
capture_output = True

proc_name = 'bonus_points'

preload_app = True

graceful_timeout = 30


def on_starting(server):
    print("[Gunicorn] Starting bonus points server...")


def on_exit(server):
    print("[Gunicorn] Bonus points server shutting down...")
