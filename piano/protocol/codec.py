"""
XML-RPC codec for the radio service.

encode_request() turns a method name and a Parameter list into the request
document. The decode_* functions turn a methodResponse document into a
(PianoReturn, payload) pair:

    - a <fault> maps onto a PianoReturn error status and a None payload
    - a <params> response yields PianoReturn.OK and the typed payload
    - anything that is not a well-formed methodResponse, or lacks a
      required member, raises DecodeError

Responses are parsed with defusedxml; the documents come from the network
and entity expansion is never wanted.
"""

from typing import Any

import defusedxml.ElementTree
from defusedxml import DefusedXmlException

from piano.core.exceptions import DecodeError
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
from piano.protocol.params import Parameter, xml_escape

__all__ = [
    "encode_request",
    "decode_simple",
    "decode_user_info",
    "decode_stations",
    "decode_playlist",
    "decode_search",
    "decode_created_station",
    "decode_added_seed",
    "xml_escape",
]


XML_DECLARATION = '<?xml version="1.0"?>'

# faultString fragments the server uses for errors a caller can act on
FAULT_CODES = {
    "AUTH_INVALID_TOKEN": PianoReturn.AUTH_TOKEN_INVALID,
    "AUTH_INVALID_USERNAME_PASSWORD": PianoReturn.AUTH_USER_PASSWORD_INVALID,
}


def encode_request(method_name: str, params: list[Parameter]) -> bytes:
    """
    Build a methodCall document.

    Args:
        method_name: Full XML-RPC method name, e.g. 'station.getStations'.
        params: Ordered parameters; each renders itself.

    Returns:
        UTF-8 encoded document.
    """
    rendered = "".join(f"<param>{param.to_xml_escaped()}</param>" for param in params)
    document = (
        f"{XML_DECLARATION}<methodCall>"
        f"<methodName>{xml_escape(method_name)}</methodName>"
        f"<params>{rendered}</params></methodCall>"
    )
    return document.encode("utf-8")


# =========================================================================
# Response documents
# =========================================================================

def _parse_value(element) -> Any:
    """Convert an XML-RPC <value> element into a Python object."""
    children = list(element)
    if not children:
        # A bare <value>text</value> is a string
        return element.text or ""

    typed = children[0]
    tag = typed.tag
    text = typed.text or ""

    if tag == "string":
        return text
    if tag in ("int", "i4"):
        try:
            return int(text.strip())
        except ValueError as e:
            raise DecodeError(f"Invalid integer value: {text!r}") from e
    if tag == "boolean":
        return text.strip() == "1"
    if tag == "double":
        try:
            return float(text.strip())
        except ValueError as e:
            raise DecodeError(f"Invalid double value: {text!r}") from e
    if tag == "struct":
        members = {}
        for member in typed.findall("member"):
            name = member.find("name")
            value = member.find("value")
            if name is None or value is None:
                raise DecodeError("Struct member without name or value")
            members[name.text or ""] = _parse_value(value)
        return members
    if tag == "array":
        return [_parse_value(value) for value in typed.findall("data/value")]
    # dateTime.iso8601, base64 and friends are kept as text
    return text


def _fault_status(fault_string: str) -> PianoReturn:
    for code, status in FAULT_CODES.items():
        if code in fault_string:
            return status
    return PianoReturn.ERR


def _read_response(document: bytes) -> tuple[PianoReturn, Any]:
    """
    Parse a methodResponse document.

    Returns:
        (status, value) where value is None for faults.

    Raises:
        DecodeError: If the document is not a methodResponse.
    """
    if not document:
        raise DecodeError("Empty response document")

    try:
        root = defusedxml.ElementTree.fromstring(document)
    except (defusedxml.ElementTree.ParseError, DefusedXmlException) as e:
        raise DecodeError(
            f"Response is not well-formed XML: {e}",
            details={"original_error": str(e)}
        ) from e

    if root.tag != "methodResponse":
        raise DecodeError(
            f"Unexpected document element <{root.tag}>",
            details={"tag": root.tag}
        )

    fault = root.find("fault/value")
    if fault is not None:
        members = _parse_value(fault)
        fault_string = ""
        if isinstance(members, dict):
            fault_string = str(members.get("faultString", ""))
        return _fault_status(fault_string), None

    value = root.find("params/param/value")
    if value is None:
        raise DecodeError("Response has neither params nor fault")
    return PianoReturn.OK, _parse_value(value)


def _expect(value: Any, kind: type, what: str) -> Any:
    if not isinstance(value, kind):
        raise DecodeError(
            f"Expected {what}, got {type(value).__name__}",
            details={"expected": what}
        )
    return value


def _required(struct: dict[str, Any], name: str) -> str:
    value = struct.get(name)
    if value is None or value == "":
        raise DecodeError(
            f"Struct is missing '{name}'",
            details={"member": name}
        )
    return str(value)


def _optional(struct: dict[str, Any], name: str) -> str:
    value = struct.get(name)
    return "" if value is None else str(value)


def _flag(value: Any) -> bool:
    # Flags usually arrive as <boolean>, sometimes as a "1" or "true" string
    return value is True or str(value).lower() in ("1", "true")


# =========================================================================
# Struct converters
# =========================================================================

def _station_fields(struct: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": _required(struct, "stationId"),
        "name": _optional(struct, "stationName"),
        "is_creator": _flag(struct.get("isCreator")),
        "is_quickmix": _flag(struct.get("isQuickMix")),
    }


def _song(struct: dict[str, Any]) -> Song:
    focus_trait_id = struct.get("focusTraitId")
    rating = SongRating.LOVE if str(struct.get("rating", "")) == "1" else SongRating.NONE
    return Song(
        title=_optional(struct, "songTitle"),
        artist=_optional(struct, "artistSummary"),
        music_id=_required(struct, "musicId"),
        audio_url=_optional(struct, "audioURL"),
        matching_seed=_optional(struct, "matchingSeed"),
        user_seed=_optional(struct, "userSeed"),
        focus_trait_id=str(focus_trait_id) if focus_trait_id else None,
        rating=rating,
    )


# =========================================================================
# Public decoders
# =========================================================================

def decode_simple(document: bytes) -> PianoReturn:
    """Status-only response: OK unless the server sent a fault."""
    status, _ = _read_response(document)
    return status


def decode_user_info(document: bytes) -> tuple[PianoReturn, UserInfo | None]:
    """Decode an authenticateListener response into the listener identity."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None

    struct = _expect(value, dict, "user info struct")
    return status, UserInfo(
        web_auth_token=struct.get("webAuthToken") or None,
        auth_token=_required(struct, "authToken"),
        listener_id=_required(struct, "listenerId"),
    )


def decode_stations(document: bytes) -> tuple[PianoReturn, list[Station] | None]:
    """Decode a getStations response; order is the server's."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None

    stations = []
    for entry in _expect(value, list, "station array"):
        stations.append(Station(**_station_fields(_expect(entry, dict, "station struct"))))
    return status, stations


def decode_playlist(document: bytes) -> tuple[PianoReturn, list[Song] | None]:
    """Decode a getFragment response; order is play order."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None

    songs = [_song(_expect(entry, dict, "song struct")) for entry in _expect(value, list, "song array")]
    return status, songs


def decode_search(document: bytes) -> tuple[PianoReturn, SearchResult | None]:
    """Decode a music search response into artist and song hits."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None

    struct = _expect(value, dict, "search result struct")
    result = SearchResult()
    for entry in _expect(struct.get("artists", []), list, "artist array"):
        entry = _expect(entry, dict, "artist struct")
        result.artists.append(Artist(
            music_id=_required(entry, "musicId"),
            name=_optional(entry, "artistName"),
        ))
    for entry in _expect(struct.get("songs", []), list, "song array"):
        entry = _expect(entry, dict, "song struct")
        result.songs.append(Song(
            title=_optional(entry, "songTitle"),
            artist=_optional(entry, "artistSummary"),
            music_id=_required(entry, "musicId"),
        ))
    return status, result


def decode_created_station(document: bytes) -> tuple[PianoReturn, Station | None]:
    """Decode a createStation response into the new station."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None
    return status, Station(**_station_fields(_expect(value, dict, "station struct")))


def decode_added_seed(document: bytes) -> tuple[PianoReturn, StationUpdate | None]:
    """Decode an addSeed response into the station's replacement data."""
    status, value = _read_response(document)
    if status is not PianoReturn.OK:
        return status, None
    return status, StationUpdate(**_station_fields(_expect(value, dict, "station struct")))
