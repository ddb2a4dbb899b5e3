"""
Client handle for the radio service.

PianoClient is the public entry point. Every remote operation follows the
same path:

    1. build an RpcRequest (timestamp + auth token + operation fields)
    2. encode it as an XML-RPC document and encrypt it
    3. POST it to the endpoint, with the same fields mirrored in the query
    4. decode the response into a PianoReturn status and payload
    5. only if the status is OK, apply the local change to the session

Failures:
    - Server faults come back as a PianoReturn status; nothing local changes.
    - Unparseable responses come back as PianoReturn.XML_INVALID.
    - Network failures raise TransportError straight out of the call.
    - rate_track() with SongRating.NONE raises InvalidRatingError before
      anything is sent.

Concurrency:
    A client is not thread-safe. One caller drives one handle at a time;
    callers sharing a handle must serialize every call themselves.
    Station and Song objects obtained from a client are valid until the
    next call that replaces their list (get_stations(), get_playlist()).

Usage:
    from piano import PianoClient, PianoReturn, SongRating

    with PianoClient() as client:
        if client.connect("user@example.com", "secret") is not PianoReturn.OK:
            raise SystemExit("login failed")
        client.get_stations()
        station = client.stations[0]
        client.get_playlist(station.id)
        client.rate_track(station, client.playlist[0], SongRating.LOVE)
"""

import time
from typing import Any, Callable

from piano.core.config import Config, default_config
from piano.core.exceptions import DecodeError, InvalidRatingError, TransportError
from piano.core.logger import get_logger
from piano.models import (
    PianoReturn,
    SearchResult,
    Song,
    SongRating,
    Station,
    UserInfo,
)
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
from piano.protocol.params import Parameter, RpcRequest
from piano.radio.session import Session
from piano.transport.crypt import BlowfishCipher
from piano.transport.http import HttpTransport


logger = get_logger(__name__)

# Trailing getFragment arguments the server insists on: two catalog
# preference ids, two empty slots and the audio format.
PLAYLIST_FRAGMENT_ARGS = ("15941546", "181840822", "", "", "aacplus")

# Music ids are turned into station seeds with this prefix
MUSIC_SEED_PREFIX = "mi"


def _decode_simple(document: bytes) -> tuple[PianoReturn, None]:
    return decode_simple(document), None


class PianoClient:
    """
    One authenticated (or not yet authenticated) handle on the service.

    Constructing a client performs no network I/O. destroy() (or leaving a
    `with` block) closes the transport and releases every owned collection.

    Attributes:
        config: Configuration in effect.
        session: Session state (route id, identity, stations, playlist).
    """

    def __init__(
        self,
        config: Config | None = None,
        transport=None,
        cipher: BlowfishCipher | None = None,
        clock: Callable[[], float] = time.time
    ) -> None:
        """
        Args:
            config: Library configuration; default_config() if None.
            transport: Object with post(url, body) -> bytes and close().
                       An HttpTransport built from config if None.
            cipher: Request body cipher; built from config.cipher.key if None.
            clock: Source of Unix time for timestamps and the route id.
        """
        self.config = config if config is not None else default_config()
        if transport is None:
            transport = HttpTransport(
                user_agent=self.config.rpc.user_agent,
                timeout=self.config.rpc.timeout
            )
        self._cipher = cipher if cipher is not None else BlowfishCipher(self.config.cipher.key)
        self._clock = clock
        self.session = Session(transport, now=clock())
        logger.debug(f"Client initialized with route id {self.session.route_id}")

    def __enter__(self) -> "PianoClient":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.destroy()

    # =========================================================================
    # Session views
    # =========================================================================

    @property
    def route_id(self) -> str:
        return self.session.route_id

    @property
    def user(self) -> UserInfo:
        return self.session.user

    @property
    def stations(self) -> list[Station]:
        return self.session.stations

    @property
    def playlist(self) -> list[Song]:
        return self.session.playlist

    def find_station(self, station_id: str) -> Station | None:
        return self.session.find_station(station_id)

    def destroy(self) -> None:
        """Close the transport and release every owned collection."""
        self.session.destroy()
        logger.debug("Client destroyed")

    # =========================================================================
    # Request plumbing
    # =========================================================================

    def _timestamp(self) -> int:
        return int(self._clock())

    def _authenticated(self, *fields: Parameter) -> list[Parameter]:
        """Prefix operation fields with the body-only timestamp and auth token."""
        return [
            Parameter.integer(self._timestamp(), mirrored=False),
            Parameter.string(self.session.user.auth_token or "", mirrored=False),
            *fields,
        ]

    def _post(self, request: RpcRequest) -> bytes:
        if self.session.transport is None:
            raise TransportError(
                "Client has been destroyed",
                details={"method": request.method}
            )

        endpoint = self.config.rpc.secure_url if request.secure else self.config.rpc.url
        url = request.url(endpoint, self.session.route_id, self.session.user.listener_id)
        body = self._cipher.encrypt(encode_request(request.method, request.params))

        logger.debug(f"POST {request.url_method}")
        try:
            return self.session.transport.post(url, body)
        except TransportError as e:
            logger.error(f"{request.url_method} failed: {e.message}")
            raise

    def _invoke(
        self,
        request: RpcRequest,
        decoder: Callable[[bytes], tuple[PianoReturn, Any]]
    ) -> tuple[PianoReturn, Any]:
        document = self._post(request)
        try:
            status, payload = decoder(document)
        except DecodeError as e:
            logger.warning(f"{request.url_method}: invalid response ({e.message})")
            return PianoReturn.XML_INVALID, None

        if status is not PianoReturn.OK:
            logger.warning(f"{request.url_method} returned {status.value}")
        return status, payload

    # =========================================================================
    # Authentication
    # =========================================================================

    def connect(self, user: str, password: str) -> PianoReturn:
        """
        Authenticate a listener.

        A sync call goes out first; its outcome, network failure included,
        is ignored. The authentication call then goes to the secure
        endpoint. The identity is stored only when it succeeds.

        Args:
            user: Listener username (UTF-8).
            password: Plaintext password (UTF-8).

        Returns:
            PianoReturn.OK, or the failure reported by the server
            (AUTH_USER_PASSWORD_INVALID for bad credentials).

        Raises:
            TransportError: If the authentication request cannot be sent.
        """
        try:
            self._post(RpcRequest("misc.sync", "sync", with_listener=False))
        except TransportError:
            logger.debug("sync failed, continuing with authentication")

        request = RpcRequest(
            "listener.authenticateListener",
            "authenticateListener",
            [
                Parameter.integer(self._timestamp(), mirrored=False),
                Parameter.string(user, mirrored=False),
                Parameter.string(password, mirrored=False),
            ],
            secure=True,
            with_listener=False
        )
        status, user_info = self._invoke(request, decode_user_info)
        if status is PianoReturn.OK:
            self.session.set_user(user_info)
            logger.info(f"Authenticated as listener {user_info.listener_id}")
        return status

    # =========================================================================
    # Retrieval
    # =========================================================================

    def get_stations(self) -> PianoReturn:
        """
        Fetch the listener's stations and replace the local station list.

        Any Station previously obtained from this client is released.
        """
        request = RpcRequest("station.getStations", "getStations", self._authenticated())
        status, stations = self._invoke(request, decode_stations)
        if status is PianoReturn.OK:
            self.session.replace_station_list(stations)
            logger.info(f"Retrieved {len(stations)} stations")
        return status

    def get_playlist(self, station_id: str) -> PianoReturn:
        """
        Fetch the next songs of a station and replace the local playlist.

        Any Song previously obtained from this client's playlist is released.
        """
        request = RpcRequest(
            "playlist.getFragment",
            "getFragment",
            self._authenticated(
                Parameter.string(station_id),
                *(Parameter.string(arg) for arg in PLAYLIST_FRAGMENT_ARGS)
            )
        )
        status, songs = self._invoke(request, decode_playlist)
        if status is PianoReturn.OK:
            self.session.replace_playlist(songs)
            logger.info(f"Retrieved {len(songs)} songs for station {station_id}")
        return status

    # =========================================================================
    # Mutations
    # =========================================================================

    def rate_track(self, station: Station, song: Song, rating: SongRating) -> PianoReturn:
        """
        Love or ban a song in the context of a station.

        Args:
            station: Station the song was played on.
            song: Song to rate.
            rating: SongRating.LOVE or SongRating.BAN.

        Returns:
            PianoReturn status; on OK song.rating equals `rating`.

        Raises:
            InvalidRatingError: If rating is not LOVE or BAN. Nothing is sent.
        """
        if rating not in (SongRating.LOVE, SongRating.BAN):
            raise InvalidRatingError(
                f"Cannot rate a song as {rating!r}; only LOVE and BAN can be set",
                details={"music_id": song.music_id}
            )

        request = RpcRequest(
            "station.addFeedback",
            "addFeedback",
            self._authenticated(
                Parameter.string(station.id),
                Parameter.string(song.music_id),
                Parameter.string(song.matching_seed),
                Parameter.string(song.user_seed),
                Parameter.string(song.focus_trait_id or ""),
                Parameter.boolean(rating is SongRating.LOVE),
                Parameter.boolean(False),
            )
        )
        status, _ = self._invoke(request, _decode_simple)
        if status is PianoReturn.OK:
            self.session.set_rating(song, rating)
        return status

    def rename_station(self, station: Station, new_name: str) -> PianoReturn:
        """Rename a station on the server, then locally."""
        request = RpcRequest(
            "station.setStationName",
            "setStationName",
            self._authenticated(
                Parameter.string(station.id),
                Parameter.string(new_name),
            )
        )
        status, _ = self._invoke(request, _decode_simple)
        if status is PianoReturn.OK:
            station.name = new_name
        return status

    def delete_station(self, station: Station) -> PianoReturn:
        """
        Delete a station on the server, then unlink it locally.

        Only the list node that is `station` itself is removed; if the
        object is not in this client's list nothing local changes.
        """
        request = RpcRequest(
            "station.removeStation",
            "removeStation",
            self._authenticated(Parameter.string(station.id))
        )
        status, _ = self._invoke(request, _decode_simple)
        if status is PianoReturn.OK and not self.session.remove_station(station):
            logger.debug("Deleted station was not in the local list")
        return status

    def create_station(self, music_id: str) -> PianoReturn:
        """
        Create a station seeded by a music id (see search_music()).

        On OK the new station is appended to the station list.
        """
        request = RpcRequest(
            "station.createStation",
            "createStation",
            self._authenticated(Parameter.string(f"{MUSIC_SEED_PREFIX}{music_id}"))
        )
        status, station = self._invoke(request, decode_created_station)
        if status is PianoReturn.OK:
            self.session.append_station(station)
            logger.info(f"Created station {station.name!r}")
        return status

    def add_music(self, station: Station, music_id: str) -> PianoReturn:
        """
        Add a seed to an existing station.

        On OK the station's data is replaced by what the server returns,
        in place, so references to `station` stay valid.
        """
        # TODO: merge the returned seed list once Station models seeds
        request = RpcRequest(
            "station.addSeed",
            "addSeed",
            self._authenticated(
                Parameter.string(station.id),
                Parameter.string(music_id),
            )
        )
        status, update = self._invoke(request, decode_added_seed)
        if status is PianoReturn.OK:
            update.apply_to(station)
        return status

    def search_music(self, search: str) -> tuple[PianoReturn, SearchResult | None]:
        """
        Search artists and songs.

        Returns:
            (status, result). result is None unless status is OK. The
            session keeps no reference; call result.destroy() when done.
        """
        request = RpcRequest(
            "music.search",
            "search",
            self._authenticated(Parameter.string(search))
        )
        return self._invoke(request, decode_search)
