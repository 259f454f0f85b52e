"""Data stores for persistence and caching.

Stores handle:
- PostgreSQL: engine lifecycle, DB sessions, declarative Base
- Redis: page payload cache with TTL

No catalog rules in stores - those belong in services.
"""
