"""
API Middleware Module

Modules:
    - correlation: Correlation ID tagging and request logging
    - error_handlers: Uniform error responses for domain, validation and unexpected errors
"""

from .correlation import CorrelationIdMiddleware
from .error_handlers import register_error_handlers

__all__ = ["CorrelationIdMiddleware", "register_error_handlers"]
