"""Request logging with correlation ids.

Each request gets an id from the X-Request-ID header, or a new UUID. The
id is stored on flask.g, echoed in the X-Request-ID response header and
included in the completion log line.
"""

import logging
import time

from flask import Flask, g, request

from ..utils import uid

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


def _start_request():
    g.request_id = request.headers.get(REQUEST_ID_HEADER) or uid.generate_uuid()
    g.request_started = time.perf_counter()

    logger.info(
        f"Incoming request {request.method} {request.path} "
        f"request_id={g.request_id} ip={request.remote_addr} "
        f"user_agent={request.headers.get('User-Agent', 'unknown')}"
    )


def _finish_request(response):
    request_id = g.get("request_id")
    if request_id:
        response.headers[REQUEST_ID_HEADER] = request_id

    duration_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
    status = response.status_code

    if status >= 500:
        level = logging.ERROR
    elif status >= 400:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(
        level,
        f"Request completed {request.method} {request.path} {status} "
        f"{duration_ms:.1f}ms request_id={request_id}"
    )
    return response


def init_request_logging(app: Flask) -> None:
    app.before_request(_start_request)
    app.after_request(_finish_request)
