"""Domain ports package."""

from .health_check import IChecker, IHealthEventSink

__all__ = ["IChecker", "IHealthEventSink"]
