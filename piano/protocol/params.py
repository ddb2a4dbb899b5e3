"""
Request parameters and the request builder.

The remote service wants every call twice: once as an XML-RPC document in
the (encrypted) body, and once as plaintext argN query arguments. Both are
rendered here, from the same Parameter objects, so the two representations
cannot drift apart.

Wire shape:
    body:  <methodCall><methodName>station.setStationName</methodName>
           <params><param><value><int>1234</int></value></param>...</params>
           </methodCall>
    url:   <endpoint>?rid=<route id>&lid=<listener id>&method=setStationName
           &arg1=<station id>&arg2=<new name>

Only mirrored parameters show up as argN; the leading timestamp and auth
token of each call are body-only.
"""

from dataclasses import dataclass, field
from enum import Enum
from urllib.parse import quote
from xml.sax.saxutils import escape


_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def xml_escape(value: str) -> str:
    """Escape &, <, >, \" and ' for use inside XML character data."""
    return escape(value, _XML_ENTITIES)


def url_escape(value: str) -> str:
    """Percent-encode everything except RFC 3986 unreserved characters."""
    return quote(value, safe="")


class ParamType(Enum):
    INT = "int"
    STRING = "string"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class Parameter:
    """
    One logical XML-RPC parameter.

    Attributes:
        type: XML-RPC scalar type.
        value: Python value (int, str or bool matching type).
        mirrored: Whether the parameter is repeated as an argN query argument.
    """

    type: ParamType
    value: int | str | bool
    mirrored: bool = True

    @classmethod
    def integer(cls, value: int, mirrored: bool = True) -> "Parameter":
        return cls(ParamType.INT, value, mirrored)

    @classmethod
    def string(cls, value: str, mirrored: bool = True) -> "Parameter":
        return cls(ParamType.STRING, value, mirrored)

    @classmethod
    def boolean(cls, value: bool, mirrored: bool = True) -> "Parameter":
        return cls(ParamType.BOOLEAN, value, mirrored)

    def to_xml_escaped(self) -> str:
        """Render as an XML-RPC <value> element."""
        if self.type is ParamType.BOOLEAN:
            text = "1" if self.value else "0"
        elif self.type is ParamType.INT:
            text = str(self.value)
        else:
            text = xml_escape(self.value)
        return f"<value><{self.type.value}>{text}</{self.type.value}></value>"

    def to_url_escaped(self) -> str:
        """Render as a query argument value."""
        if self.type is ParamType.BOOLEAN:
            return "true" if self.value else "false"
        if self.type is ParamType.INT:
            return str(self.value)
        return url_escape(self.value)


@dataclass
class RpcRequest:
    """
    Structured description of one remote call.

    Attributes:
        method: XML-RPC method name, e.g. 'station.getStations'.
        url_method: Short name for the query string, e.g. 'getStations'.
        params: Ordered parameter list.
        secure: Send to the secure endpoint.
        with_listener: Include lid=<listener id> in the query string.

    Example:
        request = RpcRequest("station.removeStation", "removeStation", [
            Parameter.integer(timestamp, mirrored=False),
            Parameter.string(auth_token, mirrored=False),
            Parameter.string(station.id),
        ])
        url = request.url(config.rpc.url, route_id, listener_id)
    """

    method: str
    url_method: str
    params: list[Parameter] = field(default_factory=list)
    secure: bool = False
    with_listener: bool = True

    def query_string(self, route_id: str, listener_id: str | None = None) -> str:
        parts = [f"rid={url_escape(route_id)}"]
        if self.with_listener:
            parts.append(f"lid={url_escape(listener_id or '')}")
        parts.append(f"method={self.url_method}")

        mirrored = [param for param in self.params if param.mirrored]
        for position, param in enumerate(mirrored, start=1):
            parts.append(f"arg{position}={param.to_url_escaped()}")

        return "&".join(parts)

    def url(self, endpoint: str, route_id: str, listener_id: str | None = None) -> str:
        return f"{endpoint}?{self.query_string(route_id, listener_id)}"
