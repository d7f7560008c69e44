"""Concrete adapters for service-layer ports (SQLAlchemy, Redis)."""
