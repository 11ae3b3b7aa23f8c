"""Infrastructure services package."""

from .health_event_sink import StructlogHealthEventSink

__all__ = ["StructlogHealthEventSink"]
