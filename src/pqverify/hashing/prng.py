"""
Keccak block PRNG

A counter-mode byte stream over Keccak-256:

    state = H(seed)
    block_i = H(state || uint64_be(i)),  i = 0, 1, 2, ...

Bytes are consumed left to right within each block. This is not the
SHAKE256 XOF of FIPS 202; it is cheaper to evaluate in the verifier
and is what the challenge and hash-to-point derivations use.
"""

from .keccak import keccak256


BLOCK_SIZE = 32
COUNTER_BYTES = 8


class KeccakPRNG:
    """Deterministic byte stream derived from a seed. Not thread-shared."""

    def __init__(self, seed: bytes):
        self.state = keccak256(seed)
        self.counter = 0
        self.refill()

    def refill(self) -> None:
        """Load the next 32-byte block into the pool"""
        self.pool = keccak256(self.state, self.counter.to_bytes(COUNTER_BYTES, "big"))
        self.remaining = BLOCK_SIZE
        self.counter += 1

    def next_byte(self) -> int:
        if self.remaining == 0:
            self.refill()
        b = self.pool[BLOCK_SIZE - self.remaining]
        self.remaining -= 1
        return b

    def read(self, n: int) -> bytes:
        """Read n bytes from the stream"""
        return bytes(self.next_byte() for _ in range(n))
