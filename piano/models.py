"""
Data models for the radio service.

Stations and songs are mutable: a station can be renamed or re-seeded and a
song's rating changes after a successful rate call. Every other field is
fixed once parsed. Each model has a release() method that clears its owned
fields; the owning collection calls it during teardown so that a stale
reference held by a caller reads as empty instead of as old data.

Usage:
    from piano.models import Station, Song, SongRating, PianoReturn

    if client.get_stations() is PianoReturn.OK:
        for station in client.stations:
            print(station.id, station.name)
"""

from dataclasses import dataclass, field
from enum import Enum


class PianoReturn(Enum):
    """
    Result of a remote operation.

    OK is the only status after which local state has been changed.
    """

    OK = "ok"
    ERR = "error"
    XML_INVALID = "xml_invalid"
    AUTH_TOKEN_INVALID = "auth_token_invalid"
    AUTH_USER_PASSWORD_INVALID = "auth_user_password_invalid"

    @property
    def needs_reauth(self) -> bool:
        """True when connect() again is the caller's way out."""
        return self is PianoReturn.AUTH_TOKEN_INVALID


class SongRating(Enum):
    """Listener rating of a song. NONE can never be set by a rate call."""

    NONE = 0
    LOVE = 1
    BAN = 2


@dataclass
class UserInfo:
    """
    Listener identity returned by authentication.

    Every field is None until connect() succeeds.
    """

    web_auth_token: str | None = None
    auth_token: str | None = None
    listener_id: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.auth_token is not None

    def clear(self) -> None:
        self.web_auth_token = None
        self.auth_token = None
        self.listener_id = None


@dataclass(eq=False)
class Station:
    """
    A radio station owned by the session's station list.

    Identity, not value, decides which list node an operation acts on, so
    equality is object identity (eq=False).

    Attributes:
        id: Server-assigned station id, the natural key.
        name: Display name; changed by rename_station().
        is_creator: True if the listener created this station.
        is_quickmix: True for the service's shuffle-all station.
    """

    id: str
    name: str
    is_creator: bool = False
    is_quickmix: bool = False

    def release(self) -> None:
        self.id = ""
        self.name = ""


@dataclass(frozen=True)
class StationUpdate:
    """Station data returned by an add-seed call; replaces the station's."""

    id: str
    name: str
    is_creator: bool = False
    is_quickmix: bool = False

    def apply_to(self, station: Station) -> None:
        station.id = self.id
        station.name = self.name
        station.is_creator = self.is_creator
        station.is_quickmix = self.is_quickmix


@dataclass(eq=False)
class Song:
    """
    A playlist entry, or a song hit in a search result.

    Search hits only carry title, artist and music_id; the remaining fields
    stay empty.

    Attributes:
        title: Song title.
        artist: Artist summary line.
        music_id: Catalog id; also usable as a seed.
        audio_url: Stream location.
        matching_seed: Opaque id attributing a rating to its playback context.
        user_seed: Opaque id attributing a rating to its playback context.
        focus_trait_id: Optional; not every response carries it.
        rating: Current listener rating.
    """

    title: str = ""
    artist: str = ""
    music_id: str = ""
    audio_url: str = ""
    matching_seed: str = ""
    user_seed: str = ""
    focus_trait_id: str | None = None
    rating: SongRating = SongRating.NONE

    def release(self) -> None:
        self.title = ""
        self.artist = ""
        self.music_id = ""
        self.audio_url = ""
        self.matching_seed = ""
        self.user_seed = ""
        self.focus_trait_id = None


@dataclass(eq=False)
class Artist:
    """An artist hit in a search result."""

    music_id: str
    name: str

    def release(self) -> None:
        self.music_id = ""
        self.name = ""


@dataclass
class SearchResult:
    """
    Artists and songs matching a search string.

    Never retained by the session: the caller owns it and releases it with
    destroy() when done.
    """

    artists: list[Artist] = field(default_factory=list)
    songs: list[Song] = field(default_factory=list)

    def destroy(self) -> None:
        release_all(self.artists)
        release_all(self.songs)


def release_all(nodes: list) -> None:
    """
    Release every node of an owned list head to tail, then empty the list.
    """
    for node in nodes:
        node.release()
    nodes.clear()
