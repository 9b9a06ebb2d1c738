"""
Polynomial backend contract

The verifiers never convolve polynomials themselves. They ask a backend
for transforms and coefficient-wise vector operations, which may be
computed in-process (NTTBackend) or by an external accelerator speaking
the wire format (WireBackend).
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..errors import MalformedInputError
from .packing import expand
from .params import RingParams


class PolyBackend(ABC):
    """
    Transform and vector-op capabilities over one ring.

    Operands may be compact (ring.compact_len words) or expanded
    (ring.n coefficients); results are always expanded.
    """

    def __init__(self, ring: RingParams):
        self.ring = ring

    @abstractmethod
    def forward_ntt(self, poly: Sequence[int]) -> List[int]:
        """NTT of a coefficient-domain polynomial"""

    @abstractmethod
    def inverse_ntt(self, poly: Sequence[int]) -> List[int]:
        """Inverse NTT of an NTT-domain polynomial"""

    @abstractmethod
    def vec_mul_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        """c[i] = a[i] * b[i] mod q"""

    @abstractmethod
    def vec_add_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        """c[i] = a[i] + b[i] mod q"""

    def vec_sub_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        """c[i] = a[i] + (q - b[i] mod q) mod q, computed locally"""
        q = self.ring.q
        a = self.coefficients(a)
        b = self.coefficients(b)
        return [(x + (q - y % q)) % q for x, y in zip(a, b)]

    def multiply(self, a: Sequence[int], b_hat: Sequence[int]) -> List[int]:
        """
        Negative-wrap product a * b mod (x^n + 1, q)

        a is in the coefficient domain, b_hat is already in the NTT domain.
        Costs three backend operations and no local convolution.
        """
        a_hat = self.forward_ntt(a)
        return self.inverse_ntt(self.vec_mul_mod(a_hat, b_hat))

    def coefficients(self, poly: Sequence[int]) -> List[int]:
        """Expanded, range-checked view of a compact or expanded operand"""
        ring = self.ring
        if len(poly) == ring.n:
            coeffs = list(poly)
        elif len(poly) == ring.compact_len:
            coeffs = expand(poly, ring.coeff_bits)
        else:
            raise MalformedInputError(
                f"{ring.name}: operand of length {len(poly)} is neither "
                f"{ring.n} coefficients nor {ring.compact_len} compact words"
            )
        for i, c in enumerate(coeffs):
            if c < 0 or c >= ring.q:
                raise MalformedInputError(f"{ring.name}: coefficient {i} = {c} is not in [0, q)")
        return coeffs
