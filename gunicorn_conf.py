import multiprocessing
import os

# Gunicorn configuration file
# For FastAPI/Uvicorn, we use the UvicornWorker
#   gunicorn app.main:app -c gunicorn_conf.py

# Bind to all interfaces on the configured port
bind = f"0.0.0.0:{os.getenv('PORT', '8080')}"

# Worker configuration
# Standard formula: (2 x num_cores) + 1
workers = multiprocessing.cpu_count() * 2 + 1
worker_class = "uvicorn.workers.UvicornWorker"

# Timeout and Keepalive
timeout = 120
keepalive = 5
# Give in-flight requests time to finish on SIGTERM
graceful_timeout = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

# Process management
name = "task_api"
reload = False  # Set to True for development only
