"""
Request logging middleware.

Logs one line per HTTP request with method, path, status, duration and client
address. Responses with status >= 400 are logged at WARNING.
"""

import logging
import time

logger = logging.getLogger("RequestLogger")


class RequestLoggingMiddleware:
    """Pure ASGI middleware that records the outcome of every HTTP request."""

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_holder = {"status": 500}

        async def send_and_capture(message):
            if message["type"] == "http.response.start":
                status_holder["status"] = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_and_capture)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            client = scope.get("client")
            client_host = client[0] if client else "-"
            status = status_holder["status"]
            line = f"{scope['method']} {scope['path']} {status} {duration_ms:.1f}ms client={client_host}"
            if status >= 400:
                logger.warning(line)
            else:
                logger.info(line)
