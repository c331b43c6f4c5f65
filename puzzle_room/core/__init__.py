"""Agent-facing primitives (context stacking).

Kept free of FastAPI concerns so it can be reused by API routes, scripts, and tests.
"""
