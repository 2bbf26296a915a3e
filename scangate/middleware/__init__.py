# Middleware package init
"""
ScanGate — Middleware Package
===============================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Open CORS] → [Access Log] → Route Handler

    1. CORS outermost: every response, including 404/405/500 and requests
       without an Origin header, gets Access-Control-Allow-Origin
    2. Access log: correlation ID, X-Request-ID header, one line per request
"""
