# Middleware package init
"""
Tutorials API — Middleware Package
====================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [GZip] → [CORS] → Route Handler

    1. Request ID first, so the access log line and error bodies can carry it
    2. Access log measures everything inside it and writes once the
       response has been sent
"""
