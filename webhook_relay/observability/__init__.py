"""Observability helpers: JSON logging via structlog and a request-id middleware.

Request ids are bound to structlog contextvars so every event emitted while a
request is in flight carries ``requestId``.
"""
