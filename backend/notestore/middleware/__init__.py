# Middleware package init
"""
NoteStore — Middleware Package
================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID first: every later log line can carry the correlation ID
    2. Logging: records status and duration once the response exists
    3. CORS: FastAPI's CORSMiddleware (handles browser preflight)
"""
