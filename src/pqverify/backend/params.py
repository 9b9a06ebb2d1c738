"""
Ring parameters for the two NTT instantiations
"""

from dataclasses import dataclass
from typing import Optional

from .utils import is_power_of_two, is_prime


# Width of one compact word (an EVM-style uint256)
WORD_BITS = 256

MIN_DEGREE = 16


@dataclass(frozen=True)
class RingParams:
    """Polynomial ring Z_q[x] / (x^n + 1) plus its packing conventions"""
    name: str
    n: int  # Ring degree
    q: int  # Prime modulus, q = 1 mod 2n
    coeff_bits: int  # Lane width in compact words and on the wire
    signed: bool  # Wire coefficients are two's complement
    psi: Optional[int] = None  # Primitive 2n-th root of unity (searched if None)

    @property
    def lanes(self) -> int:
        """Coefficients per compact word"""
        return WORD_BITS // self.coeff_bits

    @property
    def compact_len(self) -> int:
        """Number of words in a compact polynomial"""
        return self.n // self.lanes

    @property
    def coeff_bytes(self) -> int:
        """Bytes per coefficient on the wire"""
        return self.coeff_bits // 8

    def validate(self) -> None:
        """Check the ring is one the NTT boundary accepts"""
        if not is_power_of_two(self.n) or self.n < MIN_DEGREE:
            raise ValueError(f"{self.name}: degree {self.n} is not a power of two >= {MIN_DEGREE}")
        if not is_prime(self.q):
            raise ValueError(f"{self.name}: modulus {self.q} is not prime")
        if self.q % (2 * self.n) != 1:
            raise ValueError(f"{self.name}: modulus {self.q} is not 1 mod {2 * self.n}")
        if self.q >= (1 << self.coeff_bits):
            raise ValueError(f"{self.name}: modulus does not fit in {self.coeff_bits}-bit lanes")
        if self.n % self.lanes != 0:
            raise ValueError(f"{self.name}: degree is not a multiple of {self.lanes} lanes")
        if self.psi is not None and pow(self.psi, self.n, self.q) != self.q - 1:
            raise ValueError(f"{self.name}: psi = {self.psi} is not a primitive {2 * self.n}-th root of unity")


# Falcon-512: 16 coefficients per word, 2-byte unsigned wire coefficients.
# 7 is a primitive 2048-th root of unity mod 12289, so 49 = 7^2 has order 1024.
FALCON_RING = RingParams(
    name="falcon-512",
    n=512,
    q=12289,
    coeff_bits=16,
    signed=False,
    psi=49,
)

# Dilithium: 8 coefficients per word, 4-byte signed wire coefficients.
DILITHIUM_RING = RingParams(
    name="dilithium",
    n=256,
    q=8380417,  # 2^23 - 2^13 + 1
    coeff_bits=32,
    signed=True,
    psi=1753,  # Primitive 512th root of unity mod q
)


def canonical_psi(n: int, q: int) -> Optional[int]:
    """Root of unity of the built-in ring with this (n, q), if any"""
    for ring in (FALCON_RING, DILITHIUM_RING):
        if ring.n == n and ring.q == q:
            return ring.psi
    return None
