"""
Session and request orchestration: the PianoClient handle and its Session state.
"""

from piano.radio.client import PianoClient
from piano.radio.session import Session, make_route_id

__all__ = ["PianoClient", "Session", "make_route_id"]
