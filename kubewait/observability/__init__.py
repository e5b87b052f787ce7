"""Logging and metrics for kubewait."""

from kubewait.observability.logging import bound_wait_context, get_logger, setup_logging

__all__ = ["bound_wait_context", "get_logger", "setup_logging"]
