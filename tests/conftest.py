"""Test configuration and fixtures"""

import xmlrpc.client
from dataclasses import dataclass
from urllib.parse import parse_qs, urlsplit

import pytest

from piano.core.config import default_config
from piano.core.exceptions import TransportError
from piano.radio.client import PianoClient
from piano.transport.crypt import BlowfishCipher


FIXED_NOW = 1215000000.0


def response(value) -> bytes:
    """Serialize a methodResponse carrying `value`."""
    return xmlrpc.client.dumps((value,), methodresponse=True).encode("utf-8")


def fault(fault_string: str, code: int = 1) -> bytes:
    """Serialize a methodResponse fault."""
    return xmlrpc.client.dumps(
        xmlrpc.client.Fault(code, fault_string), methodresponse=True
    ).encode("utf-8")


USER_INFO = {
    "webAuthToken": "web-token",
    "authToken": "auth-token",
    "listenerId": "L42",
}

STATIONS = [
    {"stationId": "S1", "stationName": "Jazz Radio", "isCreator": True},
    {"stationId": "S2", "stationName": "Rock Radio", "isCreator": True},
    {"stationId": "S3", "stationName": "QuickMix", "isQuickMix": True},
]

PLAYLIST = [
    {
        "songTitle": "So What",
        "artistSummary": "Miles Davis",
        "musicId": "M1",
        "audioURL": "http://audio.example/1",
        "matchingSeed": "MS1",
        "userSeed": "US1",
        "focusTraitId": "FT1",
        "rating": "0",
    },
    {
        "songTitle": "Take Five",
        "artistSummary": "Dave Brubeck",
        "musicId": "M2",
        "audioURL": "http://audio.example/2",
        "matchingSeed": "MS2",
        "userSeed": "US2",
        "rating": "1",
    },
]

SEARCH = {
    "artists": [{"artistName": "Miles Davis", "musicId": "A1"}],
    "songs": [{"songTitle": "So What", "artistSummary": "Miles Davis", "musicId": "M1"}],
}

DEFAULT_RESPONSES = {
    "sync": response(True),
    "authenticateListener": response(USER_INFO),
    "getStations": response(STATIONS),
    "getFragment": response(PLAYLIST),
    "addFeedback": response(True),
    "setStationName": response(True),
    "removeStation": response(True),
    "createStation": response({"stationId": "S4", "stationName": "Miles Davis Radio"}),
    "addSeed": response({"stationId": "S1", "stationName": "Jazz & Miles Radio"}),
    "search": response(SEARCH),
}


@dataclass
class RecordedCall:
    """One request as the fixture server saw it."""
    url: str
    query: dict
    document: str

    @property
    def method(self) -> str:
        return self.query["method"][0]

    def arg(self, position: int) -> str:
        return self.query[f"arg{position}"][0]


class FixtureServer:
    """
    Stand-in transport: decrypts every body, records the call, and answers
    with the canned document registered for the query's method name.
    """

    def __init__(self, cipher: BlowfishCipher) -> None:
        self.cipher = cipher
        self.responses = dict(DEFAULT_RESPONSES)
        self.failures: set[str] = set()
        self.calls: list[RecordedCall] = []
        self.close_count = 0

    def respond(self, method: str, document: bytes) -> None:
        self.responses[method] = document

    def fail(self, method: str) -> None:
        self.failures.add(method)

    def post(self, url: str, body: bytes) -> bytes:
        query = parse_qs(urlsplit(url).query, keep_blank_values=True)
        call = RecordedCall(url, query, self.cipher.decrypt(body).decode("utf-8"))
        self.calls.append(call)
        if call.method in self.failures:
            raise TransportError("connection refused", details={"url": url})
        return self.responses[call.method]

    def close(self) -> None:
        self.close_count += 1

    def methods(self) -> list[str]:
        return [call.method for call in self.calls]

    def last(self) -> RecordedCall:
        return self.calls[-1]


@pytest.fixture
def cipher():
    """Cipher with the built-in key"""
    return BlowfishCipher(default_config().cipher.key)


@pytest.fixture
def fixture_server(cipher):
    """Fake transport answering canned XML-RPC responses"""
    return FixtureServer(cipher)


@pytest.fixture
def client(fixture_server, cipher):
    """Unauthenticated client wired to the fixture server"""
    piano = PianoClient(transport=fixture_server, cipher=cipher, clock=lambda: FIXED_NOW)
    yield piano
    piano.destroy()


@pytest.fixture
def connected_client(client, fixture_server):
    """Client that has authenticated and fetched stations and a playlist"""
    client.connect("user", "pass")
    client.get_stations()
    client.get_playlist("S1")
    fixture_server.calls.clear()
    return client
