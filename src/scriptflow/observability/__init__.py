"""Observability helpers."""

from scriptflow.observability.logging import ContextLogger, setup_logging

__all__ = ["ContextLogger", "setup_logging"]
