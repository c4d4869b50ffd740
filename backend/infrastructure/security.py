"""
Security middleware for response hardening and request size limits.

Pure ASGI middleware (no BaseHTTPMiddleware) so streaming responses pass through untouched.

Behaviour:
- Adds a fixed set of security headers to every HTTP response
- Rejects requests whose Content-Length exceeds the configured limit with 413
"""

import json
import logging

logger = logging.getLogger("Security")

SECURITY_HEADERS = (
    (b"x-content-type-options", b"nosniff"),
    (b"x-frame-options", b"DENY"),
    (b"x-xss-protection", b"1; mode=block"),
    (b"referrer-policy", b"strict-origin-when-cross-origin"),
    (b"permissions-policy", b"geolocation=(), microphone=(), camera=()"),
)


class SecurityMiddleware:
    """
    Pure ASGI middleware adding security headers and enforcing a body size cap.

    Only the declared Content-Length is checked; chunked bodies are left to the server limits.
    """

    def __init__(self, app, max_request_bytes: int = 10 * 1024):
        self.app = app
        self.max_request_bytes = max_request_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        content_length = headers.get(b"content-length", b"").decode("latin-1")

        if content_length.isdigit() and int(content_length) > self.max_request_bytes:
            logger.warning(
                f"Rejected {scope['method']} {scope['path']}: body of {content_length} bytes "
                f"exceeds {self.max_request_bytes}"
            )
            body = json.dumps({"error": "Request entity too large"}).encode()
            await send(
                {
                    "type": "http.response.start",
                    "status": 413,
                    "headers": [
                        (b"content-type", b"application/json"),
                        (b"content-length", str(len(body)).encode()),
                        *SECURITY_HEADERS,
                    ],
                }
            )
            await send({"type": "http.response.body", "body": body})
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                existing = {name.lower() for name, _ in message.get("headers", [])}
                extra = [(name, value) for name, value in SECURITY_HEADERS if name not in existing]
                message["headers"] = list(message.get("headers", [])) + extra
            await send(message)

        await self.app(scope, receive, send_with_headers)
