from .redis_refresh_token_backend import RedisRefreshTokenBackend

__all__ = ["RedisRefreshTokenBackend"]
