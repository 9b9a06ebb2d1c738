"""Keccak-256 as used by Ethereum (original Keccak padding, not SHA3-256)"""

from Crypto.Hash import keccak


def keccak256(*parts: bytes) -> bytes:
    """Keccak-256 of the concatenation of parts"""
    h = keccak.new(digest_bits=256)
    for part in parts:
        h.update(part)
    return h.digest()
