"""
In-process Number Theoretic Transform backend

Negative-wrap NTT over Z_q[x] / (x^n + 1) following the butterfly
schedule of FIPS 204 Algorithms 41-42, generalised to any power-of-two
degree and any prime q = 1 mod 2n. Each butterfly layer is evaluated
as one numpy operation over all blocks.
"""

from typing import List, Sequence

import numpy as np

from .base import PolyBackend
from .params import RingParams, canonical_psi
from .utils import find_psi, twiddles


def _dtype_for(q: int):
    # Products of two residues must fit in int64
    return np.int64 if q < (1 << 31) else object


class NTTBackend(PolyBackend):
    """
    Local PolyBackend implementation.

    Forward output is in bit-reversed order, which is all the
    coefficient-wise operations need.
    """

    def __init__(self, ring: RingParams):
        super().__init__(ring)
        ring.validate()
        psi = ring.psi
        if psi is None:
            # Same domain as the built-in rings whenever (n, q) matches one
            psi = canonical_psi(ring.n, ring.q) or find_psi(ring.n, ring.q)
        self.psi = psi
        self._dtype = _dtype_for(ring.q)
        self.zetas = twiddles(ring.n, ring.q, psi)
        self._zetas = np.array(self.zetas, dtype=self._dtype)
        self._n_inv = pow(ring.n, -1, ring.q)

    def _array(self, poly: Sequence[int]) -> np.ndarray:
        return np.array(self.coefficients(poly), dtype=self._dtype)

    def forward_ntt(self, poly: Sequence[int]) -> List[int]:
        """
        Cooley-Tukey NTT

        Layer with `blocks` blocks of 2 * length coefficients uses
        zetas[blocks .. 2 * blocks - 1], one per block.
        """
        n, q = self.ring.n, self.ring.q
        a = self._array(poly)

        blocks = 1
        length = n // 2
        while length >= 1:
            a = a.reshape(blocks, 2, length)
            zeta = self._zetas[blocks:2 * blocks].reshape(blocks, 1)
            lo = a[:, 0, :]
            t = (zeta * a[:, 1, :]) % q
            a = np.stack(((lo + t) % q, (lo - t) % q), axis=1)
            blocks *= 2
            length //= 2

        return a.reshape(n).tolist()

    def inverse_ntt(self, poly: Sequence[int]) -> List[int]:
        """
        Gentleman-Sande inverse NTT

        Walks the forward twiddles backwards with negated zetas,
        then scales by n^-1.
        """
        n, q = self.ring.n, self.ring.q
        a = self._array(poly)

        blocks = n // 2
        length = 1
        while length < n:
            a = a.reshape(blocks, 2, length)
            zeta = ((-self._zetas[blocks:2 * blocks][::-1]) % q).reshape(blocks, 1)
            lo = a[:, 0, :]
            hi = a[:, 1, :]
            a = np.stack(((lo + hi) % q, (zeta * (lo - hi)) % q), axis=1)
            blocks //= 2
            length *= 2

        return ((a.reshape(n) * self._n_inv) % q).tolist()

    def vec_mul_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        return ((self._array(a) * self._array(b)) % self.ring.q).tolist()

    def vec_add_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        return ((self._array(a) + self._array(b)) % self.ring.q).tolist()
