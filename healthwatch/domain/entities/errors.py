"""
Domain Errors

This module defines custom error classes for domain-specific exceptions.
"""

from typing import Any, Dict, Optional


class HealthCheckError(Exception):
    """Base class for health-check domain errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class CheckNotFoundError(HealthCheckError):
    """Raised when a check id is not registered."""

    def __init__(self, check_id: str, details: Optional[Dict[str, Any]] = None):
        self.check_id = check_id
        message = f"Health check with id '{check_id}' not found"
        super().__init__(message, details)


class DuplicateCheckError(HealthCheckError):
    """Raised when registering an id that already exists."""

    def __init__(self, check_id: str, details: Optional[Dict[str, Any]] = None):
        self.check_id = check_id
        message = f"Health check with id '{check_id}' already exists"
        super().__init__(message, details)


class UnsupportedCheckTypeError(HealthCheckError):
    """Raised when no checker can evaluate a check type or resource kind."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)


class CheckerError(HealthCheckError):
    """Raised by a checker when an evaluation attempt fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
