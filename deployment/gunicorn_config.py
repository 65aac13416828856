"""
Gunicorn Configuration for ExpenseTracker Pro
Run with: gunicorn -c deployment/gunicorn_config.py "app:create_app('production')"
"""
import os

# Server Socket
bind = f"127.0.0.1:{os.environ.get('PORT', '5000')}"
backlog = 64

# Worker Processes
# One worker: SQLite file database and an in-memory rate limit store
workers = 1
worker_class = 'sync'
max_requests = 1000
max_requests_jitter = 50
timeout = 60
keepalive = 5

# Logging
_log_dir = os.environ.get('LOG_DIR', 'logs')
accesslog = os.path.join(_log_dir, 'gunicorn_access.log')
errorlog = os.path.join(_log_dir, 'gunicorn_error.log')
loglevel = os.environ.get('LOG_LEVEL', 'info').lower()
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s" %(D)s'

# Process Naming
proc_name = 'expensetracker'

# Server Mechanics
daemon = False
umask = 0o007

# Security
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190


def on_starting(server):
    os.makedirs(_log_dir, exist_ok=True)


def post_fork(server, worker):
    """Called after a worker has been forked"""
    server.log.info("Worker spawned (pid: %s)", worker.pid)


def when_ready(server):
    """Called when the server is ready"""
    server.log.info("Server is ready. Spawning workers")


def worker_abort(worker):
    """Called when a worker fails to boot or times out"""
    worker.log.info("worker received SIGABRT signal")
