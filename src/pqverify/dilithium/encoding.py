"""
Encoding and rounding functions for Dilithium verification
Based on FIPS 204 Algorithms 16-21, 36 and 40
"""

from typing import List, Optional, Sequence, Tuple

from .params import DilithiumParams


def hint_bit_pack(h: Sequence[Sequence[int]], params: DilithiumParams) -> bytes:
    """
    HintBitPack

    Input: h in {0,1}^(k x n) with at most omega ones
    Output: y in B^(omega + k)
    """
    omega, k = params.omega, params.k
    y = bytearray(omega + k)
    idx = 0
    for i in range(k):
        for j in range(params.n):
            if h[i][j]:
                if idx >= omega:
                    raise ValueError(f"Hint has more than omega = {omega} ones")
                y[idx] = j
                idx += 1
        y[omega + i] = idx
    return bytes(y)


def hint_bit_unpack(y: bytes, params: DilithiumParams) -> Optional[List[List[int]]]:
    """
    HintBitUnpack

    Input: y in B^(omega + k)
    Output: h in {0,1}^(k x n), or None if malformed

    Row i owns y[prev : y[omega + i]]. Indices in a row must be strictly
    increasing and below n; the unused tail of y[:omega] must be zero.
    """
    omega, k, n = params.omega, params.k, params.n
    if len(y) != omega + k:
        return None

    h = [[0] * n for _ in range(k)]
    prev = 0
    for i in range(k):
        end = y[omega + i]
        if end < prev or end > omega:
            return None
        for j in range(prev, end):
            if j > prev and y[j] <= y[j - 1]:
                return None  # Indices must be strictly increasing
            if y[j] >= n:
                return None
            h[i][y[j]] = 1
        prev = end

    for j in range(prev, omega):
        if y[j] != 0:
            return None  # Padding must be zero

    if sum(sum(row) for row in h) > omega:
        return None
    return h


def z_pack(z: Sequence[Sequence[int]], params: DilithiumParams) -> bytes:
    """
    BitPack of z with a = gamma1 - 1, b = gamma1

    Input: l polynomials with coefficients in [-(gamma1 - 1), gamma1]
    Output: l * 32 * z_bits bytes, each value stored as gamma1 - z
    """
    gamma1, bits = params.gamma1, params.z_bits
    poly_bytes = params.n * bits // 8
    out = bytearray()
    for poly in z:
        acc = 0
        for i, coef in enumerate(poly):
            acc |= (gamma1 - coef) << (i * bits)
        out.extend(acc.to_bytes(poly_bytes, "little"))
    return bytes(out)


def z_unpack(data: bytes, params: DilithiumParams) -> Optional[List[List[int]]]:
    """
    BitUnpack of z fused with the infinity-norm check

    Input: z as packed in the signature
    Output: l polynomials with coefficients mod q, or None if the
            length is wrong or some |z_i| exceeds gamma1 - beta
    """
    if len(data) != params.z_size:
        return None

    q, gamma1, bits = params.q, params.gamma1, params.z_bits
    bound = params.z_bound
    mask = (1 << bits) - 1
    poly_bytes = params.n * bits // 8

    z = []
    for p in range(params.l):
        acc = int.from_bytes(data[p * poly_bytes:(p + 1) * poly_bytes], "little")
        poly = []
        for i in range(params.n):
            altered = (acc >> (i * bits)) & mask
            if altered <= gamma1:
                coef = gamma1 - altered
            else:
                coef = q + gamma1 - altered
            if coef > bound and q - coef > bound:
                return None
            poly.append(coef)
        z.append(poly)
    return z


def decompose(r: int, gamma2: int, q: int) -> Tuple[int, int]:
    """
    Split r into high and low parts around multiples of 2 * gamma2

    Input: r in Z_q
    Output: (r1, r0) with r = r1 * 2 * gamma2 + r0 mod q and
            r0 in (-gamma2, gamma2]

    The top residue class, where r - r0 = q - 1, folds onto r1 = 0 with
    r0 shifted down by one.
    """
    alpha = 2 * gamma2
    r %= q
    r0 = r % alpha
    if r0 > gamma2:
        r0 -= alpha
    if r - r0 == q - 1:
        return 0, r0 - 1
    return (r - r0) // alpha, r0


def use_hint(h: int, r: int, gamma2: int, q: int) -> int:
    """High bits of r, moved one step toward r0 when the hint is set"""
    r1, r0 = decompose(r, gamma2, q)
    if not h:
        return r1
    m = (q - 1) // (2 * gamma2)
    step = 1 if r0 > 0 else -1
    return (r1 + step) % m


def w1_pack(w1: Sequence[Sequence[int]], params: DilithiumParams) -> bytes:
    """
    Pack the k x n high-bits values for the challenge hash

    With 6-bit values this puts four coefficients in every three bytes,
    least significant bits first (FIPS 204 SimpleBitPack per polynomial).
    """
    bits = params.w1_bits
    limit = params.hint_modulus
    acc = 0
    shift = 0
    for poly in w1:
        for coef in poly:
            if coef < 0 or coef >= limit:
                raise ValueError(f"w1 coefficient {coef} outside [0, {limit})")
            acc |= coef << shift
            shift += bits
    return acc.to_bytes(params.w1_size, "little")
