"""
Pytest suite for the marketplace orders backend.

Test categories:
- unit: pure helpers (pagination, time windows, auth) and service rules
- api: full FastAPI app over httpx against in-memory SQLite
"""
