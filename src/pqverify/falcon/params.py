"""
Falcon parameter set
"""

from dataclasses import dataclass

from ..backend.params import FALCON_RING, RingParams


@dataclass(frozen=True)
class FalconParams:
    """Parameter set for Falcon verification"""
    name: str
    ring: RingParams
    sig_bound: int  # Upper bound (exclusive) on ||s1||^2 + ||s2||^2
    salt_len: int  # Salt length in bytes

    @property
    def n(self) -> int:
        return self.ring.n

    @property
    def q(self) -> int:
        return self.ring.q


FALCON512_PARAMS = FalconParams(
    name="Falcon-512",
    ring=FALCON_RING,
    sig_bound=34034726,
    salt_len=40,
)
