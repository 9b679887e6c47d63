"""Shared utilities."""

from watch_server.utils.logger import setup_logger

__all__ = ["setup_logger"]
