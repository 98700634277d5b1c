"""Exceptions raised by the weather report service."""


class WeatherServiceError(Exception):
    """Base exception for this service."""


class FetchError(WeatherServiceError):
    """The observation request to FMI did not produce a payload."""


class FetchTransportError(FetchError):
    """Connection, HTTP status or body read failure."""


class FetchTimeoutError(FetchError):
    """The fetch exceeded its own time bound."""


class OrchestratorTimeoutError(WeatherServiceError):
    """The request deadline elapsed before a fetch result arrived."""


class MalformedEnvelopeError(WeatherServiceError):
    """The payload is not a WFS feature collection.

    ``dump_path`` is set when the raw payload was preserved on disk.
    """

    def __init__(self, message: str, dump_path=None):
        super().__init__(message)
        self.dump_path = dump_path


class ConfigurationError(WeatherServiceError):
    """Invalid service configuration."""
