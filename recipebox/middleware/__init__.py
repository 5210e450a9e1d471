"""
RecipeBox Backend — Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    Request ID runs first so the logging middleware and the exception
    handlers can attach the id to everything they emit.
"""
