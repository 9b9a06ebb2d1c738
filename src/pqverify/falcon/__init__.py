"""
Falcon-512 verification over the NTT backend
"""

from .falcon import FalconVerifier, verify_falcon, verify_falcon_hashed
from .params import FALCON512_PARAMS, FalconParams

__all__ = [
    "FalconVerifier",
    "verify_falcon",
    "verify_falcon_hashed",
    "FalconParams",
    "FALCON512_PARAMS",
]
