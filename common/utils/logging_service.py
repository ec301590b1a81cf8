import logging
import os
import sys
import time

from flask import g, request

logger = logging.getLogger("movie_catalog")  # use a consistent name

if not logger.hasHandlers():  # avoid duplicate handlers in some environments
    logger.setLevel(
        getattr(logging, os.getenv("LOG_LEVEL", "DEBUG").upper(), logging.DEBUG)
    )

    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(formatter)

    logger.addHandler(handler)

logger.propagate = False


def start_request_timer():
    g.request_started = time.perf_counter()


def log_request(response):
    started = g.get("request_started")
    elapsed = (time.perf_counter() - started) * 1000 if started is not None else 0.0

    logger.info(
        f"{request.method} {request.path} -> {response.status_code} ({elapsed:.0f} ms)"
    )
    return response
