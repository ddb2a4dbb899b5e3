"""
Session state for one client handle.

A Session owns everything a handle accumulates: the transport, the route
id, the listener identity, the station list and the current playlist.
Collections are only ever changed through the named operations below, so
that wholesale replacement and teardown are explicit.

Ownership:
    Every Station in `stations` and every Song in `playlist` belongs to
    exactly one Session. Replacing or destroying a collection releases its
    nodes first (their fields are cleared), so a reference kept by a caller
    across get_stations() / get_playlist() reads as empty rather than stale.
"""

import time

from piano.models import Song, SongRating, Station, UserInfo, release_all


def make_route_id(now: float | None = None) -> str:
    """
    Derive a route id from the current time.

    The timestamp is shifted right by 8 bits (about four minutes of
    resolution) and zero-padded to seven digits, followed by 'P'.
    Processes started within the same window share a route id.
    """
    if now is None:
        now = time.time()
    return f"{int(now) >> 8:07d}P"


class Session:
    """
    Mutable state of one client handle.

    Attributes:
        transport: Transport adapter, owned; closed by destroy().
        user: Listener identity; empty until authentication succeeds.
        stations: Owned station list in server order.
        playlist: Owned song list in play order.
    """

    def __init__(self, transport, now: float | None = None) -> None:
        self.transport = transport
        self._route_id = make_route_id(now)
        self.user = UserInfo()
        self.stations: list[Station] = []
        self.playlist: list[Song] = []

    @property
    def route_id(self) -> str:
        """Assigned once at construction, never changed."""
        return self._route_id

    # =========================================================================
    # Identity
    # =========================================================================

    def set_user(self, user: UserInfo) -> None:
        self.user = user

    # =========================================================================
    # Station list
    # =========================================================================

    def replace_station_list(self, stations: list[Station]) -> None:
        """Discard the whole station list and adopt `stations`. No merge."""
        self.destroy_stations()
        self.stations = list(stations)

    def append_station(self, station: Station) -> None:
        self.stations.append(station)

    def find_station(self, station_id: str) -> Station | None:
        """First station with the given id, or None."""
        for station in self.stations:
            if station.id == station_id:
                return station
        return None

    def remove_station(self, station: Station) -> bool:
        """
        Unlink and release the node that *is* `station`.

        An equal-looking station that is not the owned node is left alone.

        Returns:
            True if a node was removed.
        """
        for index, candidate in enumerate(self.stations):
            if candidate is station:
                del self.stations[index]
                candidate.release()
                return True
        return False

    def destroy_stations(self) -> None:
        release_all(self.stations)

    # =========================================================================
    # Playlist
    # =========================================================================

    def replace_playlist(self, songs: list[Song]) -> None:
        """Discard the whole playlist and adopt `songs`. No merge."""
        self.destroy_playlist()
        self.playlist = list(songs)

    def set_rating(self, song: Song, rating: SongRating) -> None:
        song.rating = rating

    def destroy_playlist(self) -> None:
        release_all(self.playlist)

    # =========================================================================
    # Teardown
    # =========================================================================

    def destroy(self) -> None:
        """
        Close the transport, forget the identity and release both lists.

        Idempotent: a second call finds nothing left to release.
        """
        if self.transport is not None:
            self.transport.close()
            self.transport = None
        self.user.clear()
        self.destroy_stations()
        self.destroy_playlist()
