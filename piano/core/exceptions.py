"""
Exception classes for piano-client.

This module defines the custom exceptions raised by the library. Remote,
server-reported failures are NOT exceptions: they come back from every
client operation as a PianoReturn status. Exceptions are reserved for
conditions the server never sees (local misuse, configuration) and for
failures that prevent a status from existing at all (network).

Exception Hierarchy:
    PianoError (base)
        ConfigError - Configuration file issues
        TransportError - HTTP / network failure
        DecodeError - Malformed XML-RPC response document
        InvalidRatingError - Rating request that can never succeed
"""


class PianoError(Exception):
    """
    Base exception for all piano-client errors.

    All custom exceptions in this project inherit from this class,
    allowing callers to catch every library error with a single
    except clause if desired.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional context (e.g., method, URL).

    Example:
        try:
            client.get_stations()
        except PianoError as e:
            logger.error(f"Operation failed: {e.message}")
            if e.details:
                logger.debug(f"Details: {e.details}")
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional context about the error.
                     Common keys include:
                     - 'method': XML-RPC method name of the failed call
                     - 'url': request URL (never contains credentials)
                     - 'original_error': The underlying exception if wrapping another error
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return the error message for display."""
        return self.message


class ConfigError(PianoError):
    """
    Raised when there's an issue with the configuration file.

    Common causes:
        - piano.yaml not found at an explicitly given path
        - invalid YAML syntax
        - a field with the wrong type (e.g., negative timeout)

    Example:
        raise ConfigError(
            "'rpc.timeout' must be a positive number",
            details={'field': 'rpc.timeout', 'value': -1}
        )
    """
    pass


class TransportError(PianoError):
    """
    Raised when the HTTP POST of a request fails.

    The request never produced a response document, so no status can be
    reported. The error propagates straight out of the client operation;
    nothing is retried and no local state is changed.

    Attributes:
        is_timeout: True if the request timed out.
        http_status: HTTP status code when the server answered with an
                     error status, None for connection-level failures.
    """

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        is_timeout: bool = False,
        http_status: int | None = None
    ) -> None:
        super().__init__(message, details)
        self.is_timeout = is_timeout
        self.http_status = http_status


class DecodeError(PianoError):
    """
    Raised by the protocol codec when a response document cannot be parsed
    or lacks a required member.

    The client converts this into PianoReturn.XML_INVALID; no partial
    result is ever returned.

    Example:
        raise DecodeError(
            "Station struct is missing 'stationId'",
            details={'member': 'stationId'}
        )
    """
    pass


class InvalidRatingError(PianoError):
    """
    Raised when rate_track() is asked to set SongRating.NONE.

    A rating can only be set to love or ban; the server has no call that
    removes one. The request is rejected before anything is sent.
    """
    pass
