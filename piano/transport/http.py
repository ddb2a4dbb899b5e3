"""
HTTP transport for piano-client.

A thin wrapper around requests.Session that POSTs an opaque body to a URL
and hands back the raw response body. The client identification string is
fixed when the transport is created and sent with every request.

Failures of any kind (connection refused, DNS, timeout, non-2xx status)
are raised as TransportError. Nothing is retried here.
"""

import requests

from piano.core.config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from piano.core.exceptions import TransportError
from piano.core.logger import get_logger


logger = get_logger(__name__)


class HttpTransport:
    """
    Blocking HTTP POST transport.

    Attributes:
        user_agent: Client identification string (read-only).
        timeout: Seconds before a request is abandoned.

    Example:
        transport = HttpTransport(user_agent="piano-client/0.1")
        body = transport.post("http://host/radio/xmlrpc/v19?rid=...", ciphertext)
        transport.close()
    """

    def __init__(
        self,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None
    ) -> None:
        self._session = session if session is not None else requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent,
            "Content-Type": "text/xml",
        })
        self._user_agent = user_agent
        self.timeout = timeout

    @property
    def user_agent(self) -> str:
        return self._user_agent

    def post(self, url: str, body: bytes) -> bytes:
        """
        POST body to url.

        Args:
            url: Full request URL including query string.
            body: Request body, sent as-is.

        Returns:
            The raw response body.

        Raises:
            TransportError: If the request could not be completed or the
                            server answered with a non-2xx status.
        """
        try:
            response = self._session.post(url, data=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.Timeout as e:
            raise TransportError(
                f"Request timed out after {self.timeout}s",
                details={"url": url, "original_error": str(e)},
                is_timeout=True
            ) from e
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise TransportError(
                f"Server answered with HTTP {status}",
                details={"url": url, "original_error": str(e)},
                http_status=status
            ) from e
        except requests.RequestException as e:
            raise TransportError(
                f"HTTP request failed: {e}",
                details={"url": url, "original_error": str(e)}
            ) from e

        logger.debug(f"Received {len(response.content)} bytes")
        return response.content

    def close(self) -> None:
        """Release pooled connections. Safe to call more than once."""
        self._session.close()
