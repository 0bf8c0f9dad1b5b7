# Middleware package init
"""
Notes API — Middleware Package
================================

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → [Errors] → Route Handler

    1. Request ID first: every later log line can carry the ID
    2. Logging: records status and duration of the full downstream call
    3. GZip / CORS: standard Starlette middleware, no custom behavior
    4. Errors innermost: an unexpected exception becomes the 500 envelope
       while the ID and access log are still in scope
"""
