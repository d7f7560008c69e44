"""WSGI entrypoint: ``gunicorn -c gunicorn.conf.py wsgi:app``."""

from chirpy import create_app

app = create_app()
