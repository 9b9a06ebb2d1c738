"""
Post-Quantum Signature Verification over an NTT backend

Verifiers for two lattice signature schemes whose inner loop is
polynomial arithmetic delegated to a pluggable backend:
- Falcon-512 (NTRU lattice, hash-and-sign)
- Dilithium in the ML-DSA-44 shape (module lattice, Fiat-Shamir)

Usage:
    from pqverify import FalconVerifier, DilithiumVerifier

    # In-process NTT (default)
    ok = FalconVerifier().verify(message, salt, s2, ntth)

    # Same arithmetic through the accelerator wire format
    from pqverify import WireBackend, DILITHIUM_RING
    verifier = DilithiumVerifier(backend=WireBackend(DILITHIUM_RING, transport))
"""

import logging

from .backend import (
    DILITHIUM_RING,
    FALCON_RING,
    NTTBackend,
    PolyBackend,
    RingParams,
    WireBackend,
    compact,
    expand,
    handle_request,
)
from .dilithium import (
    ETHDILITHIUM_PARAMS,
    DilithiumParams,
    DilithiumPublicKey,
    DilithiumSignature,
    DilithiumVerifier,
    verify_dilithium,
)
from .errors import BackendError, MalformedInputError, PQVerifyError
from .falcon import FALCON512_PARAMS, FalconParams, FalconVerifier, verify_falcon, verify_falcon_hashed
from .hashing import KeccakPRNG, hash_to_point, hash_to_point_shake, keccak256, sample_in_ball

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"
__all__ = [
    # Backend
    "PolyBackend",
    "NTTBackend",
    "WireBackend",
    "handle_request",
    "compact",
    "expand",
    "RingParams",
    "FALCON_RING",
    "DILITHIUM_RING",
    # Hashing
    "keccak256",
    "KeccakPRNG",
    "hash_to_point",
    "hash_to_point_shake",
    "sample_in_ball",
    # Falcon
    "FalconVerifier",
    "FalconParams",
    "FALCON512_PARAMS",
    "verify_falcon",
    "verify_falcon_hashed",
    # Dilithium
    "DilithiumVerifier",
    "DilithiumPublicKey",
    "DilithiumSignature",
    "DilithiumParams",
    "ETHDILITHIUM_PARAMS",
    "verify_dilithium",
    # Errors
    "PQVerifyError",
    "MalformedInputError",
    "BackendError",
]
