"""Logging helpers for the vehicular service."""

from .logging import setup_logging, request_logger, modification_logger

__all__ = ["setup_logging", "request_logger", "modification_logger"]
