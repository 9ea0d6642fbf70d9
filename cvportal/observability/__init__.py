"""
Observability module.

Provides structured logging helpers and correlation ID tracking.
"""

from cvportal.observability.correlation import get_correlation_id, set_correlation_id
from cvportal.observability.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger", "get_correlation_id", "set_correlation_id"]
