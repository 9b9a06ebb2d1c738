"""
Challenge samplers built on the Keccak PRNG
"""

from hashlib import shake_256
from typing import List

from .prng import KeccakPRNG


def hash_to_point(salt: bytes, message: bytes, n: int = 512, q: int = 12289) -> List[int]:
    """
    Hash (salt, message) to a polynomial with coefficients in [0, q)

    Reads 16-bit big-endian samples from KeccakPRNG(message || salt) and
    keeps t mod q for every t < floor(2^16 / q) * q, so the result is
    uniform mod q.
    """
    if q > (1 << 16):
        raise ValueError("The modulus is too large")

    bound = ((1 << 16) // q) * q
    prng = KeccakPRNG(message + salt)
    hashed = []
    while len(hashed) < n:
        t = (prng.next_byte() << 8) | prng.next_byte()
        if t < bound:
            hashed.append(t % q)
    return hashed


def hash_to_point_shake(salt: bytes, message: bytes, n: int = 512, q: int = 12289) -> List[int]:
    """
    Hash (salt, message) to a point the way reference Falcon does:
    SHAKE256(salt || message) read as 16-bit big-endian samples.
    """
    if q > (1 << 16):
        raise ValueError("The modulus is too large")

    bound = ((1 << 16) // q) * q
    xof = shake_256(salt + message)
    stream = b""
    pos = 0
    hashed = []
    while len(hashed) < n:
        if pos == len(stream):
            # Another 2n samples
            stream = xof.digest(len(stream) + 4 * n)
        t = (stream[pos] << 8) | stream[pos + 1]
        pos += 2
        if t < bound:
            hashed.append(t % q)
    return hashed


def sample_in_ball(seed: bytes, tau: int, q: int, n: int = 256) -> List[int]:
    """
    SampleInBall over the Keccak PRNG

    Input: seed (c_tilde), tau non-zero coefficients
    Output: c in Z_q^256 with exactly tau entries equal to 1 or q - 1

    The first 8 stream bytes are a little-endian 64-bit sign word,
    consumed from its least significant bit. Index j is drawn by
    rejection from single bytes, and the swap order is fixed.
    """
    if n != 256:
        raise ValueError("SampleInBall draws byte-sized indices and needs n = 256")
    if not 0 < tau <= 64:
        raise ValueError(f"tau = {tau} needs more than 64 sign bits")

    prng = KeccakPRNG(seed)
    signs = int.from_bytes(prng.read(8), "little")

    c = [0] * n
    for i in range(n - tau, n):
        while True:
            j = prng.next_byte()
            if j <= i:
                break
        c[i] = c[j]
        c[j] = q - 1 if signs & 1 else 1
        signs >>= 1
    return c
