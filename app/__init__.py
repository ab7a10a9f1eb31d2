"""FastAPI Issue Tracker Application.

A single-tenant issue tracker API with:
- Email/password registration and bearer-token authentication
- Owner-scoped CRUD over issues
- Search, filtering, pagination and per-status statistics
- SQLAlchemy ORM with async support
"""
