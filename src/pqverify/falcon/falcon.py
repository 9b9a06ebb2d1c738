"""
Falcon signature verification

Given s2 and the public key h in the NTT domain, the verifier
recomputes s1 = hashed - s2 * h mod (x^n + 1, q) and accepts when
(s1, s2) is short: ||s1||^2 + ||s2||^2 < sig_bound.
"""

import logging
from typing import Callable, List, Optional, Sequence

from ..backend import NTTBackend, PolyBackend, center, expand
from ..hashing import hash_to_point
from .params import FALCON512_PARAMS, FalconParams

logger = logging.getLogger(__name__)

HashToPoint = Callable[..., List[int]]


class FalconVerifier:
    """
    Falcon verifier over a PolyBackend

    Holds no per-call state; one instance can serve concurrent calls.
    """

    def __init__(self, params: FalconParams = FALCON512_PARAMS,
                 backend: Optional[PolyBackend] = None,
                 hasher: HashToPoint = hash_to_point):
        self.params = params
        self.backend = backend if backend is not None else NTTBackend(params.ring)
        self.hasher = hasher

    def hash_to_point(self, salt: bytes, message: bytes) -> List[int]:
        return self.hasher(salt, message, self.params.n, self.params.q)

    def verify(self, message: bytes, salt: bytes, s2: Sequence[int], ntth: Sequence[int]) -> bool:
        """
        Verify a signature (salt, s2) on message

        Input:
            message: Signed message
            salt: Signature salt
            s2: Compact signature polynomial
            ntth: Compact public key in the NTT domain

        Output: True if valid, False otherwise
        """
        hashed = self.hash_to_point(salt, message)
        return self.verify_hashed(hashed, s2, ntth)

    def verify_hashed(self, hashed: Sequence[int], s2: Sequence[int], ntth: Sequence[int]) -> bool:
        """Verify against an already hashed message point"""
        params = self.params
        ring = params.ring
        q = params.q

        # Step 1: Shape checks
        if len(hashed) != params.n:
            logger.debug("Falcon reject: hashed point has %d coefficients", len(hashed))
            return False
        if len(s2) != ring.compact_len or len(ntth) != ring.compact_len:
            logger.debug("Falcon reject: s2/ntth are not %d compact words", ring.compact_len)
            return False
        if any(c < 0 or c >= q for c in hashed):
            logger.debug("Falcon reject: hashed point coefficient outside [0, q)")
            return False
        if any(w < 0 or w >> 256 for w in s2) or any(w < 0 or w >> 256 for w in ntth):
            logger.debug("Falcon reject: word outside uint256")
            return False
        s2_coeffs = expand(s2, ring.coeff_bits)
        if any(c >= q for c in s2_coeffs) or any(c >= q for c in expand(ntth, ring.coeff_bits)):
            logger.debug("Falcon reject: s2/ntth coefficient outside [0, q)")
            return False

        # Step 2: s2 * h through the backend
        s1_raw = self.backend.multiply(s2, ntth)

        # Step 3-4: s1 = hashed - s2 * h, centred, and the squared norm
        norm = 0
        for i in range(params.n):
            s1 = center(hashed[i] - s1_raw[i], q)
            norm += s1 * s1
        for c in s2_coeffs:
            s = center(c, q)
            norm += s * s

        # Step 5: Bound check
        if norm >= params.sig_bound:
            logger.debug("Falcon reject: squared norm %d >= %d", norm, params.sig_bound)
            return False
        return True


def verify_falcon(message: bytes, salt: bytes, s2: Sequence[int], ntth: Sequence[int],
                  backend: Optional[PolyBackend] = None) -> bool:
    """Verify a Falcon-512 signature with the default parameters"""
    return FalconVerifier(backend=backend).verify(message, salt, s2, ntth)


def verify_falcon_hashed(hashed: Sequence[int], s2: Sequence[int], ntth: Sequence[int],
                         backend: Optional[PolyBackend] = None) -> bool:
    """
    Verify against a message point hashed by the caller

    Input: hashed (n coefficients in [0, q)), compact s2 and ntth
    Output: True iff the recovered (s1, s2) is short enough
    """
    return FalconVerifier(backend=backend).verify_hashed(hashed, s2, ntth)
