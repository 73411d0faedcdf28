"""
ProjectHub Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied around route handlers.

Contents:
    request_id.py — correlation id per request (X-Request-ID)
    logging.py    — access log line per request
    auth.py       — bearer-token authentication dependency

Execution order for a request:
    Request → [Request ID] → [Logging] → [CORS] → authenticate_token → Handler
"""
