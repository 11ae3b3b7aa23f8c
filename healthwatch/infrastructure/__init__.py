"""
Infrastructure Layer Package

This package contains implementations of interfaces defined in the
domain layer: protocol checkers backed by third-party clients and the
structlog event sink.
"""

from healthwatch.infrastructure import checkers, services

__all__ = ["checkers", "services"]
