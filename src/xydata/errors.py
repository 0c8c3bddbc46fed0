from __future__ import annotations


class XYDataError(Exception):
    """Base class for errors raised by xydata."""


class UnknownGeneratorError(XYDataError, ValueError):
    """Raised when a generator type is not registered."""


class GeneratorBusyError(XYDataError, RuntimeError):
    """A production pass is already running on this generator instance."""


class StreamBusyError(XYDataError, RuntimeError):
    """A window is already being produced for this stream."""


class StreamExhausted(XYDataError):
    """The stream will not produce any more windows."""


class GenerationCancelled(XYDataError):
    """The production pass was abandoned while suspended at a yield."""
