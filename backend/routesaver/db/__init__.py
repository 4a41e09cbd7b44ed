"""Database Base — SQLAlchemy declarative Base shared by all models.

Invariants:
    - Engine and sessions are owned by infrastructure/database.py

Design Decisions:
    - asyncpg driver for PostgreSQL, aiosqlite for tests
"""
