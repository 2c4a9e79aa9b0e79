"""Raw advertisement handling: field extraction, AES-CTR decryption and hex dumps."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

ADVERT_SIZE = 26
BLOCK_SIZE = 16
KEY_SIZE = 16

_IV_LSB = 7
_IV_MSB = 8
_CIPHER_START = 10


class KeyNotSetError(LookupError):
    """Raised when no encryption key is configured for a device name."""


@dataclass(frozen=True)
class Advertisement:
    """Manufacturer data advertised by a device, padded to 26 bytes."""

    data: bytes

    @classmethod
    def from_bytes(cls, data: bytes) -> "Advertisement":
        """Build an advertisement from manufacturer data of at most 26 bytes."""
        raw = bytes(data)
        if len(raw) > ADVERT_SIZE:
            raise ValueError(
                f"manufacturer data is {len(raw)} bytes, at most {ADVERT_SIZE} allowed"
            )
        return cls(raw.ljust(ADVERT_SIZE, b"\x00"))

    @property
    def iv(self) -> bytes:
        """The 16-byte initialisation vector: the two nonce bytes, then zeros."""
        return bytes((self.data[_IV_LSB], self.data[_IV_MSB])).ljust(BLOCK_SIZE, b"\x00")

    @property
    def cipher(self) -> bytes:
        """The 16 encrypted bytes that follow the header."""
        return self.data[_CIPHER_START:_CIPHER_START + BLOCK_SIZE]

    def decrypt(self, key: bytes) -> bytes:
        """Decrypt the encrypted payload with the given 16-byte key."""
        return decrypt_block(key, self.iv, self.cipher)


def decrypt_block(key: bytes, iv: bytes, cipher: bytes) -> bytes:
    """Decrypt (or encrypt) ``cipher`` with AES-128 in counter mode."""
    if len(key) != KEY_SIZE:
        raise ValueError(f"key must be {KEY_SIZE} bytes, got {len(key)}")
    if len(iv) != BLOCK_SIZE:
        raise ValueError(f"iv must be {BLOCK_SIZE} bytes, got {len(iv)}")
    ctr = Cipher(algorithms.AES(bytes(key)), modes.CTR(bytes(iv))).decryptor()
    return ctr.update(bytes(cipher)) + ctr.finalize()


def lookup_key(name: str, keys: Mapping[str, bytes]) -> bytes:
    """Return the encryption key configured for ``name``."""
    try:
        key = bytes(keys[name])
    except KeyError:
        raise KeyNotSetError(f"encryption key not set for {name!r}") from None
    if len(key) != KEY_SIZE:
        raise ValueError(f"key for {name!r} must be {KEY_SIZE} bytes, got {len(key)}")
    return key


_RAW_SEPARATORS = {6: " (", 8: ") ", 9: "] ", 17: " | "}


def format_raw(data: bytes) -> str:
    """Render raw manufacturer data with markers around the nonce and header."""
    last = len(data) - 1
    parts = ["["]
    for i, value in enumerate(data):
        parts.append(f"{value:02X}")
        parts.append(_RAW_SEPARATORS.get(i, " " if i < last else ""))
    return "".join(parts)


def format_block(block: bytes) -> str:
    """Render a 16-byte block as hex, split in two halves."""
    head = " ".join(f"{b:02X}" for b in block[:8])
    tail = " ".join(f"{b:02X}" for b in block[8:16])
    return f"{head} | {tail}" if tail else head


def format_bins(block: bytes) -> str:
    """Render each byte of a block as an indexed binary and hex line."""
    return "".join(
        f"\t{' ' if i < 10 else ''}[{i}] {b:08b} | {b:02X}\n"
        for i, b in enumerate(block[:BLOCK_SIZE])
    )