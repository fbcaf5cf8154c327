from .middleware import LoggingMiddleware
from .setup import configure_logging

__all__ = ["LoggingMiddleware", "configure_logging"]
