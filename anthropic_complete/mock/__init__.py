"""Scripted transport package for tests and offline use."""

from .transport import ScriptedResponse, ScriptedTransport, TrackingByteStream

__all__ = ["ScriptedTransport", "ScriptedResponse", "TrackingByteStream"]
