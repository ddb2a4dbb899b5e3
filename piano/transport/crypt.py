"""
Request body cipher.

Request documents are obscured with Blowfish in ECB mode: the UTF-8
plaintext is zero-padded to a multiple of the 8-byte block size, encrypted
block by block, and the ciphertext is sent as lowercase hex. The key is
baked into the client (see piano.core.config.DEFAULT_CIPHER_KEY).

This is obfuscation required by the remote service, not confidentiality:
anyone holding the client holds the key.
"""

import binascii

from Cryptodome.Cipher import Blowfish

from piano.core.config import DEFAULT_CIPHER_KEY


BLOCK_SIZE = Blowfish.block_size


class BlowfishCipher:
    """
    Deterministic symmetric cipher for request bodies.

    Example:
        cipher = BlowfishCipher()
        body = cipher.encrypt(b"<?xml version=\\"1.0\\"?>...")
    """

    def __init__(self, key: str = DEFAULT_CIPHER_KEY) -> None:
        self._key = key.encode("utf-8")

    def _new(self):
        return Blowfish.new(self._key, Blowfish.MODE_ECB)

    def encrypt(self, plaintext: bytes) -> bytes:
        """
        Encrypt a request body.

        Args:
            plaintext: Raw document bytes.

        Returns:
            Hex-encoded ciphertext, ASCII bytes, 16 hex digits per block.
        """
        remainder = len(plaintext) % BLOCK_SIZE
        if remainder:
            plaintext += b"\0" * (BLOCK_SIZE - remainder)
        return binascii.hexlify(self._new().encrypt(plaintext))

    def decrypt(self, ciphertext: bytes) -> bytes:
        """
        Reverse encrypt(). Trailing zero padding is stripped.

        Raises:
            ValueError: If ciphertext is not hex or not a whole number of blocks.
        """
        try:
            raw = binascii.unhexlify(ciphertext)
        except binascii.Error as e:
            raise ValueError(f"Ciphertext is not valid hex: {e}") from e
        if len(raw) % BLOCK_SIZE:
            raise ValueError("Ciphertext length is not a multiple of the block size")
        return self._new().decrypt(raw).rstrip(b"\0")
