"""
Accelerator wire format

Request:  op (1 byte) || degree (4 bytes BE) || modulus (8 bytes BE)
          || one or two coefficient blocks
Response: one coefficient block

A coefficient block is `degree` big-endian integers of a fixed width:
2 bytes unsigned for Falcon, 4 bytes signed for Dilithium.
"""

import logging
import struct
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Callable, List, Sequence, Tuple

from ..errors import BackendError, MalformedInputError
from .base import PolyBackend
from .ntt import NTTBackend
from .params import MIN_DEGREE, RingParams
from .utils import is_power_of_two, is_prime

logger = logging.getLogger(__name__)

HEADER = struct.Struct(">BIQ")

# Coefficient width in bytes -> two's complement on the wire
WIDTH_SIGNED = {2: False, 4: True}


class Op(IntEnum):
    NTT_FW = 0
    NTT_INV = 1
    VEC_MUL = 2
    VEC_ADD = 3


def operand_count(op: Op) -> int:
    return 2 if op in (Op.VEC_MUL, Op.VEC_ADD) else 1


@dataclass(frozen=True)
class WireRequest:
    """Decoded accelerator request"""
    op: Op
    n: int
    q: int
    width: int
    operands: Tuple[List[int], ...]


def encode_coefficients(coeffs: Sequence[int], width: int, signed: bool) -> bytes:
    try:
        return b"".join(c.to_bytes(width, "big", signed=signed) for c in coeffs)
    except OverflowError as exc:
        raise MalformedInputError(f"Coefficient does not fit in {width} bytes") from exc


def decode_coefficients(data: bytes, width: int, signed: bool) -> List[int]:
    if len(data) % width != 0:
        raise MalformedInputError(f"{len(data)} bytes is not a whole number of {width}-byte coefficients")
    return [
        int.from_bytes(data[i:i + width], "big", signed=signed)
        for i in range(0, len(data), width)
    ]


def encode_request(op: Op, ring: RingParams, *operands: Sequence[int]) -> bytes:
    """Serialise an operation on expanded operands for the accelerator"""
    if len(operands) != operand_count(op):
        raise MalformedInputError(f"{op.name} takes {operand_count(op)} operand(s), got {len(operands)}")
    payload = bytearray(HEADER.pack(op, ring.n, ring.q))
    for operand in operands:
        if len(operand) != ring.n:
            raise MalformedInputError(f"Operand has {len(operand)} coefficients, expected {ring.n}")
        payload.extend(encode_coefficients(operand, ring.coeff_bytes, ring.signed))
    return bytes(payload)


def decode_request(payload: bytes) -> WireRequest:
    """Parse a request; the coefficient width is implied by the body length"""
    if len(payload) < HEADER.size:
        raise MalformedInputError("Request shorter than its header")
    tag, n, q = HEADER.unpack_from(payload)
    try:
        op = Op(tag)
    except ValueError as exc:
        raise MalformedInputError(f"Unknown operation tag {tag}") from exc
    if n == 0:
        raise MalformedInputError("Ring degree is zero")

    body = payload[HEADER.size:]
    count = operand_count(op)
    width, rest = divmod(len(body), count * n)
    if rest or width not in WIDTH_SIGNED:
        raise MalformedInputError(f"Body of {len(body)} bytes does not hold {count} x {n} coefficients")

    block = n * width
    operands = tuple(
        decode_coefficients(body[i * block:(i + 1) * block], width, WIDTH_SIGNED[width])
        for i in range(count)
    )
    return WireRequest(op=op, n=n, q=q, width=width, operands=operands)


@lru_cache(maxsize=16)
def _engine(n: int, q: int, width: int) -> NTTBackend:
    ring = RingParams(name=f"wire-{n}-{q}", n=n, q=q, coeff_bits=8 * width,
                      signed=WIDTH_SIGNED[width])
    return NTTBackend(ring)


def handle_request(payload: bytes) -> bytes:
    """
    In-process accelerator: validate a request and answer it.

    Rejects degrees that are not powers of two >= 16, composite moduli,
    moduli not 1 mod 2n, and input coefficients outside [0, q).
    """
    request = decode_request(payload)
    n, q = request.n, request.q
    if not is_power_of_two(n) or n < MIN_DEGREE:
        raise MalformedInputError(f"Ring degree {n} is not a power of two >= {MIN_DEGREE}")
    if not is_prime(q):
        raise MalformedInputError(f"Modulus {q} is not prime")
    if q % (2 * n) != 1:
        raise MalformedInputError(f"Modulus {q} is not 1 mod {2 * n}")
    for operand in request.operands:
        if any(c < 0 or c >= q for c in operand):
            raise MalformedInputError("Input coefficient outside [0, q)")

    engine = _engine(n, q, request.width)
    if request.op == Op.NTT_FW:
        result = engine.forward_ntt(request.operands[0])
    elif request.op == Op.NTT_INV:
        result = engine.inverse_ntt(request.operands[0])
    elif request.op == Op.VEC_MUL:
        result = engine.vec_mul_mod(*request.operands)
    else:
        result = engine.vec_add_mod(*request.operands)

    return encode_coefficients(result, request.width, WIDTH_SIGNED[request.width])


Transport = Callable[[bytes], bytes]


class WireBackend(PolyBackend):
    """
    PolyBackend that delegates every transform and vector op to an
    accelerator reached through `transport`.

    Transport failures and malformed responses raise BackendError;
    nothing is retried.
    """

    def __init__(self, ring: RingParams, transport: Transport = handle_request):
        super().__init__(ring)
        self.transport = transport

    def _call(self, op: Op, *operands: Sequence[int]) -> List[int]:
        ring = self.ring
        payload = encode_request(op, ring, *(self.coefficients(p) for p in operands))
        try:
            response = self.transport(payload)
        except (OSError, ValueError) as exc:
            logger.warning("%s: %s request failed: %s", ring.name, op.name, exc)
            raise BackendError(f"{op.name} request failed: {exc}") from exc

        expected = ring.n * ring.coeff_bytes
        if len(response) != expected:
            logger.warning("%s: %s response is %d bytes, expected %d",
                           ring.name, op.name, len(response), expected)
            raise BackendError(f"{op.name} response is {len(response)} bytes, expected {expected}")

        coeffs = decode_coefficients(response, ring.coeff_bytes, ring.signed)
        if any(c < 0 or c >= ring.q for c in coeffs):
            logger.warning("%s: %s response coefficient out of range", ring.name, op.name)
            raise BackendError(f"{op.name} response coefficient outside [0, q)")
        return coeffs

    def forward_ntt(self, poly: Sequence[int]) -> List[int]:
        return self._call(Op.NTT_FW, poly)

    def inverse_ntt(self, poly: Sequence[int]) -> List[int]:
        return self._call(Op.NTT_INV, poly)

    def vec_mul_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        return self._call(Op.VEC_MUL, a, b)

    def vec_add_mod(self, a: Sequence[int], b: Sequence[int]) -> List[int]:
        return self._call(Op.VEC_ADD, a, b)
