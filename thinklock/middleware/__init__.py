# ==============================================================================
# MIDDLEWARE PACKAGE
# ==============================================================================

from thinklock.middleware.request_logger import RequestLoggerMiddleware

__all__ = ["RequestLoggerMiddleware"]
