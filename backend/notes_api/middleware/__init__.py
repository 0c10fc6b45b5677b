# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Assigns the correlation ID used by every log line
    2. Logging: Logs method, path, status and duration with that ID
"""
