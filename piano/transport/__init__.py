"""
Transport layer: the HTTP POST adapter and the request body cipher.
"""

from piano.transport.crypt import BlowfishCipher
from piano.transport.http import HttpTransport

__all__ = ["BlowfishCipher", "HttpTransport"]
