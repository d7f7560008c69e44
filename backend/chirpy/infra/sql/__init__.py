from .sqlalchemy_refresh_token_backend import SQLAlchemyRefreshTokenBackend

__all__ = ["SQLAlchemyRefreshTokenBackend"]
