# Middleware package init
"""
Note Service — Middleware Package
==================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    Responses travel back in reverse order, so the request ID header is set
    on every response and the access log sees the final status code.

Error translation (errors.py) is registered as exception handlers rather
than as a middleware class: an error raised by a route is converted into the
single JSON error response for that request.
"""
