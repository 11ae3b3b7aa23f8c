"""Application models package."""

from .execution import ExecutionDefaults, ExecutionOptions

__all__ = ["ExecutionDefaults", "ExecutionOptions"]
