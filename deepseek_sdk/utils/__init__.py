"""Utility modules."""
from .logging import get_logger, redact_headers, setup_logging

__all__ = ["setup_logging", "get_logger", "redact_headers"]
