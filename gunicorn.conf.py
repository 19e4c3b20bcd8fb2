import os

# The stores rewrite whole files with no locking: one worker process only.
bind = os.getenv("BIND", "0.0.0.0:10000")
workers = 1
threads = 1

worker_class = "sync"
timeout = int(os.getenv("WEB_TIMEOUT", "30"))
graceful_timeout = int(os.getenv("WEB_GRACEFUL_TIMEOUT", "10"))
keepalive = int(os.getenv("WEB_KEEPALIVE", "5"))

# Logging
loglevel = os.getenv("LOG_LEVEL", "info").lower()
accesslog = "-"   # stdout
errorlog = "-"    # stderr
capture_output = True

# Build stores + services once, before serving
preload_app = True
wsgi_app = "app:create_app()"

def when_ready(server):
    server.log.info("Roster API ready on %s", bind)

def worker_int(worker):
    worker.log.info("Worker received INT or QUIT signal")
