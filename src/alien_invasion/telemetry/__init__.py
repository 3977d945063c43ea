"""Logging setup for the command line entrypoint."""

from .logging import LOG_FORMAT, ContextFormatter, configure_logging

__all__ = ["LOG_FORMAT", "ContextFormatter", "configure_logging"]
