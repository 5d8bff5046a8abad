"""Utility helpers for BrowserSnapshot."""

from .logger import BrowserSnapshotLogger, LogLevel, LogLine, configure_logging

__all__ = [
    "BrowserSnapshotLogger",
    "LogLevel",
    "LogLine",
    "configure_logging",
]
