"""
Domain Layer Package

This package contains the core rules of the health-check engine.
It defines entities, errors, ports and status rules without dependencies
on external frameworks or infrastructure concerns.
"""

# Re-export submodules
from healthwatch.domain import entities, ports, services

__all__ = ["entities", "ports", "services"]
