"""
Checkers Package - Infrastructure Layer

One checker per check type. Each one speaks its protocol through a
third-party client and reports a ``CheckOutcome``.
"""

from .callable_checker import CallableChecker
from .database_checker import DatabaseChecker
from .http_checker import HttpChecker
from .system_checker import SystemChecker

__all__ = ["CallableChecker", "DatabaseChecker", "HttpChecker", "SystemChecker"]
