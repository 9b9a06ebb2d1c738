"""
Polynomial backend: NTT transforms, vector ops and the compact codec.

`NTTBackend` computes in-process; `WireBackend` forwards the same
operations to an accelerator over the request/response wire format.
"""

from .base import PolyBackend
from .ntt import NTTBackend
from .packing import compact, expand
from .params import DILITHIUM_RING, FALCON_RING, WORD_BITS, RingParams
from .utils import center
from .wire import Op, WireBackend, handle_request

__all__ = [
    "PolyBackend",
    "NTTBackend",
    "WireBackend",
    "Op",
    "handle_request",
    "compact",
    "expand",
    "center",
    "RingParams",
    "FALCON_RING",
    "DILITHIUM_RING",
    "WORD_BITS",
]
