"""
Dilithium (ML-DSA-44 shape) verification over the NTT backend

The challenge is re-derived with the Keccak block PRNG rather than
SHAKE256, so signatures must come from a signer using the same PRNG.
"""

from .dilithium import (
    DilithiumPublicKey,
    DilithiumSignature,
    DilithiumVerifier,
    derive_challenge,
    message_prime,
    verify_dilithium,
)
from .params import D, ETHDILITHIUM_PARAMS, DilithiumParams

__all__ = [
    "DilithiumVerifier",
    "DilithiumPublicKey",
    "DilithiumSignature",
    "derive_challenge",
    "message_prime",
    "verify_dilithium",
    "DilithiumParams",
    "ETHDILITHIUM_PARAMS",
    "D",
]
