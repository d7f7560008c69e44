"""Chirpy: short posts, JWT access tokens and revocable refresh tokens.

``gunicorn wsgi:app`` and ``flask --app chirpy`` both go through
:func:`create_app`.
"""

from __future__ import annotations

from .factory import create_app

__all__ = ["create_app"]
