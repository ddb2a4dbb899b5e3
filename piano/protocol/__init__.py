"""
Protocol layer: request parameters, the request builder and the XML-RPC codec.
"""

from piano.protocol.codec import (
    decode_added_seed,
    decode_created_station,
    decode_playlist,
    decode_search,
    decode_simple,
    decode_stations,
    decode_user_info,
    encode_request,
)
from piano.protocol.params import Parameter, ParamType, RpcRequest, url_escape, xml_escape

__all__ = [
    "Parameter",
    "ParamType",
    "RpcRequest",
    "encode_request",
    "decode_simple",
    "decode_user_info",
    "decode_stations",
    "decode_playlist",
    "decode_search",
    "decode_created_station",
    "decode_added_seed",
    "xml_escape",
    "url_escape",
]
