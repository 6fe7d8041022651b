"""
Designers/actors sample database.

- SQLAlchemy Core table definitions shared by seeding, checks and SQL rendering
- Alembic migrations config (one revision per draft of the schema)
- Deterministic seed loader and polymorphic favorite checks
"""
