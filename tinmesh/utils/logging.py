"""Logging utilities for triangulation runs."""

import logging
import json


class StructuredLogger:
    """Logger that adds structured context to messages."""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, msg: str, **context):
        """Log debug message with structured context."""
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context):
        """Log info message with structured context."""
        self._log(logging.INFO, msg, **context)

    def error(self, msg: str, **context):
        """Log error message with structured context."""
        self._log(logging.ERROR, msg, **context)

    def _log(self, level: int, msg: str, **context):
        """Internal method to format and log messages."""
        if context:
            msg = f"{msg} | {json.dumps(context, sort_keys=True, default=str)}"
        self.logger.log(level, msg)

# Create default logger instance
mesh_logger = StructuredLogger("tinmesh.triangulation")
