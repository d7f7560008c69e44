import os

bind = os.getenv("GUNICORN_BIND", "0.0.0.0:8080")

# The /admin/metrics hit counter lives in process memory, so one worker keeps
# it exact; scale with threads instead.
workers = int(os.getenv("GUNICORN_WORKERS", "1"))
worker_class = "gthread"
threads = int(os.getenv("GUNICORN_THREADS", "4"))
timeout = 60
graceful_timeout = 30
keepalive = 5

# JSON app logs go to stdout via chirpy.core.logger; gunicorn keeps its own.
accesslog = "-"
errorlog = "-"
loglevel = os.getenv("LOG_LEVEL", "info").lower()

forwarded_allow_ips = os.getenv("FORWARDED_ALLOW_IPS", "127.0.0.1")

wsgi_app = "wsgi:app"
