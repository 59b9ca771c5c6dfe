import multiprocessing
import os

# Gunicorn configuration file
# gunicorn -c gunicorn_conf.py app.main:app

bind = os.getenv("BIND", "0.0.0.0:5000")

# Standard formula: (2 x num_cores) + 1
workers = int(os.getenv("WEB_CONCURRENCY", multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"

timeout = 120
keepalive = 5

# Logging
accesslog = "-" # Log to stdout
errorlog = "-"  # Log to stderr
loglevel = os.getenv("LOG_LEVEL", "info").lower()

name = "project_manager_api"
reload = False  # Set to True for development only
