"""Keccak-256, the Keccak block PRNG and the samplers built on it"""

from .keccak import keccak256
from .prng import KeccakPRNG
from .sampling import hash_to_point, hash_to_point_shake, sample_in_ball

__all__ = [
    "keccak256",
    "KeccakPRNG",
    "hash_to_point",
    "hash_to_point_shake",
    "sample_in_ball",
]
