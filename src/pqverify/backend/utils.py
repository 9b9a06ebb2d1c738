"""
Number-theoretic helpers shared by the backend implementations
"""

from typing import List


# Miller-Rabin with these bases is exact for every n < 3.3 * 10^24,
# which covers the 8-byte modulus field of the wire format.
_MR_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41)


def bitrev(x: int, bits: int) -> int:
    """Reverse the lowest `bits` bits of x"""
    result = 0
    for _ in range(bits):
        result = (result << 1) | (x & 1)
        x >>= 1
    return result


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def is_prime(n: int) -> bool:
    """Deterministic primality test for 64-bit moduli"""
    if n < 2:
        return False
    for p in _MR_BASES:
        if n % p == 0:
            return n == p

    d = n - 1
    s = 0
    while d % 2 == 0:
        d //= 2
        s += 1

    for a in _MR_BASES:
        x = pow(a, d, n)
        if x == 1 or x == n - 1:
            continue
        for _ in range(s - 1):
            x = pow(x, 2, n)
            if x == n - 1:
                break
        else:
            return False
    return True


def find_psi(n: int, q: int) -> int:
    """
    Find a primitive 2n-th root of unity modulo q.

    Since 2n is a power of two, psi has order exactly 2n as soon as
    psi^n = -1 mod q, so no factorisation of q - 1 is needed.
    """
    if (q - 1) % (2 * n) != 0:
        raise ValueError(f"q = {q} is not 1 mod 2n for n = {n}")
    exponent = (q - 1) // (2 * n)
    for g in range(2, q):
        psi = pow(g, exponent, q)
        if pow(psi, n, q) == q - 1:
            return psi
    raise ValueError(f"No primitive {2 * n}-th root of unity modulo {q}")


def twiddles(n: int, q: int, psi: int) -> List[int]:
    """psi^BitRev(k) mod q for k = 0, ..., n - 1 (FIPS 204 zeta ordering)"""
    log_n = n.bit_length() - 1
    return [pow(psi, bitrev(k, log_n), q) for k in range(n)]


def center(x: int, q: int) -> int:
    """Symmetric representative of x mod q in (-q/2, q/2]"""
    x %= q
    if x > q // 2:
        x -= q
    return x
