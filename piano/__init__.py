"""
piano-client: a client library for an internet-radio service's XML-RPC protocol.

It authenticates a listener, retrieves and mutates stations and playlists,
and searches the music catalog. Requests are XML-RPC documents, Blowfish
encrypted, POSTed over HTTP with their parameters mirrored in the query
string.

Modules:
    core/       - Configuration, logging, exceptions
    transport/  - HTTP transport (requests) and request body cipher
    protocol/   - Request parameters, request builder, XML-RPC codec
    radio/      - PianoClient handle and its Session state
    models      - Station, Song, SearchResult, PianoReturn, ...

Usage:
    from piano import PianoClient, PianoReturn, SongRating, setup_logging

    setup_logging("INFO")

    with PianoClient() as client:
        if client.connect("user@example.com", "secret") is PianoReturn.OK:
            client.get_stations()
            for station in client.stations:
                print(station.name)

Configuration:
    Optional; see piano.core.config. Without a piano.yaml the built-in
    endpoints, user agent and cipher key are used.

Dependencies:
    - requests: HTTP transport
    - pyyaml: Configuration file parsing
    - pycryptodomex: Blowfish request body cipher
    - defusedxml: Safe parsing of response documents
"""

__version__ = "0.1.0"
__author__ = "piano-client"
__license__ = "MIT"

from piano.core import (
    Config,
    ConfigError,
    DecodeError,
    InvalidRatingError,
    PianoError,
    TransportError,
    default_config,
    get_logger,
    load_config,
    setup_logging,
    shutdown_logging,
)
from piano.models import (
    Artist,
    PianoReturn,
    SearchResult,
    Song,
    SongRating,
    Station,
    StationUpdate,
    UserInfo,
)
from piano.radio import PianoClient

__all__ = [
    # Version
    "__version__",
    # Client
    "PianoClient",
    # Core
    "Config",
    "default_config",
    "load_config",
    "setup_logging",
    "shutdown_logging",
    "get_logger",
    # Exceptions
    "PianoError",
    "ConfigError",
    "TransportError",
    "DecodeError",
    "InvalidRatingError",
    # Models
    "PianoReturn",
    "SongRating",
    "Station",
    "StationUpdate",
    "Song",
    "Artist",
    "SearchResult",
    "UserInfo",
]
