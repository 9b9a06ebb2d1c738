"""
Dilithium parameter set (ML-DSA-44 shape)
"""

from dataclasses import dataclass

from ..backend.params import DILITHIUM_RING, RingParams


D = 13  # Dropped bits from t


@dataclass(frozen=True)
class DilithiumParams:
    """Parameter set for Dilithium verification"""
    name: str
    ring: RingParams
    k: int  # Rows in matrix A
    l: int  # Columns in matrix A
    tau: int  # Number of +/-1 coefficients in challenge
    beta: int  # tau * eta
    gamma1: int  # z coefficient range
    gamma2: int  # Low-order rounding range
    omega: int  # Maximum number of 1s in hint
    lambda_: int  # Collision strength (bits)

    @property
    def n(self) -> int:
        return self.ring.n

    @property
    def q(self) -> int:
        return self.ring.q

    @property
    def c_tilde_size(self) -> int:
        """Challenge digest size in bytes"""
        return self.lambda_ // 4

    @property
    def z_bits(self) -> int:
        """Bits per packed z coefficient (18 for gamma1 = 2^17)"""
        return (2 * self.gamma1 - 1).bit_length()

    @property
    def z_size(self) -> int:
        return self.l * self.n * self.z_bits // 8

    @property
    def z_bound(self) -> int:
        """Largest accepted |z| coefficient"""
        return self.gamma1 - self.beta

    @property
    def h_size(self) -> int:
        return self.omega + self.k

    @property
    def sig_size(self) -> int:
        """Packed signature size in bytes"""
        return self.c_tilde_size + self.z_size + self.h_size

    @property
    def hint_modulus(self) -> int:
        """m = (q - 1) / (2 * gamma2), the number of high-bits values"""
        return (self.q - 1) // (2 * self.gamma2)

    @property
    def w1_bits(self) -> int:
        return (self.hint_modulus - 1).bit_length()

    @property
    def w1_size(self) -> int:
        """Size of the packed w1 commitment"""
        return self.k * self.n * self.w1_bits // 8


ETHDILITHIUM_PARAMS = DilithiumParams(
    name="ETHDILITHIUM-44",
    ring=DILITHIUM_RING,
    k=4,
    l=4,
    tau=39,
    beta=78,  # tau * eta
    gamma1=1 << 17,
    gamma2=(DILITHIUM_RING.q - 1) // 88,
    omega=80,
    lambda_=128,
)
