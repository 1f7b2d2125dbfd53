"""Result reporting for Connect4."""

from .http import HTTPReporter
from .interface import ResultReporter, build_payload
from .log_reporter import LogReporter


__all__ = [
    "ResultReporter",
    "build_payload",
    "LogReporter",
    "HTTPReporter",
]
