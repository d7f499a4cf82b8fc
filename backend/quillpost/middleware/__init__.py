# Middleware package init
"""
Quillpost Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [CORS] → [Request ID] → [Logging] → Route Handler

    1. CORS: Starlette's CORSMiddleware (handles preflight); outermost so
       every response, 500s included, carries the CORS headers
    2. Request ID: correlation ID for logs and error bodies
    3. Logging: one access line per request, with the request ID; turns
       unhandled exceptions into the generic 500
"""
