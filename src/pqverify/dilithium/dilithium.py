"""
Dilithium signature verification

Phase 1 decodes the hint and z (with the z norm check) and rejects
malformed signatures before any backend work. Phase 2 computes

    w' = NTT^-1(A_hat * NTT(z) - NTT(c) * t1_hat)

applies the hint to recover w1, and re-derives the challenge digest
from (tr, M', w1) with the Keccak block PRNG.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..backend import NTTBackend, PolyBackend, compact
from ..hashing import KeccakPRNG, sample_in_ball
from ..hashing.prng import BLOCK_SIZE
from .encoding import hint_bit_unpack, use_hint, w1_pack, z_unpack
from .params import D, ETHDILITHIUM_PARAMS, DilithiumParams

logger = logging.getLogger(__name__)

MAX_CONTEXT = 255


@dataclass(frozen=True)
class DilithiumPublicKey:
    """
    Verifier form of a public key

    a_hat: k x l compact polynomials, already in the NTT domain
    tr: digest of the encoded public key
    t1: k compact polynomials holding NTT(t1 << d)
    """
    a_hat: Sequence[Sequence[Sequence[int]]]
    tr: bytes
    t1: Sequence[Sequence[int]]

    @classmethod
    def from_components(cls, a_hat: Sequence[Sequence[Sequence[int]]], tr: bytes,
                        t1: Sequence[Sequence[int]], backend: PolyBackend) -> "DilithiumPublicKey":
        """
        Build the verifier form from an expanded NTT-domain matrix and
        the raw t1 polynomials of a FIPS 204 public key.
        """
        bits = backend.ring.coeff_bits
        a_hat_compact = [[compact(backend.coefficients(p), bits) for p in row] for row in a_hat]
        t1_hat = [compact(backend.forward_ntt([c << D for c in poly]), bits) for poly in t1]
        return cls(a_hat=a_hat_compact, tr=bytes(tr), t1=t1_hat)


@dataclass(frozen=True)
class DilithiumSignature:
    """Signature split into its challenge digest, packed z and packed hint"""
    c_tilde: bytes
    z: bytes
    h: bytes

    @classmethod
    def from_bytes(cls, sigma: bytes, params: DilithiumParams = ETHDILITHIUM_PARAMS
                   ) -> Optional["DilithiumSignature"]:
        """Split c_tilde || z || h; None if sigma has the wrong length"""
        if len(sigma) != params.sig_size:
            return None
        z_start = params.c_tilde_size
        h_start = z_start + params.z_size
        return cls(c_tilde=bytes(sigma[:z_start]),
                   z=bytes(sigma[z_start:h_start]),
                   h=bytes(sigma[h_start:]))

    def to_bytes(self) -> bytes:
        return self.c_tilde + self.z + self.h


def message_prime(message: bytes, ctx: bytes = b"") -> bytes:
    """M' = 0 || |ctx| || ctx || M for pure (non pre-hash) signing"""
    if len(ctx) > MAX_CONTEXT:
        raise ValueError("Context string must be at most 255 bytes")
    return bytes([0, len(ctx)]) + ctx + message


def derive_challenge(tr: bytes, m_prime: bytes, w1_bytes: bytes) -> bytes:
    """
    Challenge digest over the Keccak block PRNG

    mu = (out1, out2), the first two blocks of PRNG(tr || M');
    the digest is the first block of PRNG(out1 || out2 || w1).
    """
    prng = KeccakPRNG(tr + m_prime)
    out1 = prng.read(BLOCK_SIZE)
    out2 = prng.read(BLOCK_SIZE)
    return KeccakPRNG(out1 + out2 + w1_bytes).read(BLOCK_SIZE)


class DilithiumVerifier:
    """
    Dilithium verifier over a PolyBackend

    Holds no per-call state; one instance can serve concurrent calls.
    """

    def __init__(self, params: DilithiumParams = ETHDILITHIUM_PARAMS,
                 backend: Optional[PolyBackend] = None):
        self.params = params
        self.backend = backend if backend is not None else NTTBackend(params.ring)

    def verify(self, pk: DilithiumPublicKey, message: bytes,
               signature: DilithiumSignature, ctx: bytes = b"") -> bool:
        """
        Verify a signature

        Input:
            pk: Public key in verifier form
            message: Message
            signature: Signature
            ctx: Context string (max 255 bytes)

        Output: True if valid, False otherwise
        """
        if len(ctx) > MAX_CONTEXT:
            logger.debug("Dilithium reject: context of %d bytes", len(ctx))
            return False
        return self._verify_internal(pk, message_prime(message, ctx), signature)

    def verify_packed(self, pk: DilithiumPublicKey, message: bytes,
                      sigma: bytes, ctx: bytes = b"") -> bool:
        """Verify a signature given as c_tilde || z || h"""
        signature = DilithiumSignature.from_bytes(sigma, self.params)
        if signature is None:
            logger.debug("Dilithium reject: packed signature of %d bytes", len(sigma))
            return False
        return self.verify(pk, message, signature, ctx)

    def _check_shapes(self, pk: DilithiumPublicKey, signature: DilithiumSignature) -> bool:
        params = self.params
        words = params.ring.compact_len
        if len(signature.c_tilde) != params.c_tilde_size:
            return False
        if len(pk.a_hat) != params.k or len(pk.t1) != params.k:
            return False
        for row in pk.a_hat:
            if len(row) != params.l or any(len(p) != words for p in row):
                return False
        return all(len(p) == words for p in pk.t1)

    def _verify_internal(self, pk: DilithiumPublicKey, m_prime: bytes,
                         signature: DilithiumSignature) -> bool:
        params = self.params
        backend = self.backend
        k, l, q = params.k, params.l, params.q
        gamma2 = params.gamma2

        # Phase 1: signature-local validation
        if not self._check_shapes(pk, signature):
            logger.debug("Dilithium reject: public key or signature has the wrong shape")
            return False

        h = hint_bit_unpack(signature.h, params)
        if h is None:
            logger.debug("Dilithium reject: malformed hint")
            return False

        z = z_unpack(signature.z, params)
        if z is None:
            logger.debug("Dilithium reject: z is malformed or too large")
            return False

        # Phase 2: c = SampleInBall(c_tilde)
        c = sample_in_ball(signature.c_tilde, params.tau, q, params.n)
        c_hat = backend.forward_ntt(compact(c, params.ring.coeff_bits))

        # w' = NTT^-1(A_hat * NTT(z) - c_hat * t1_hat)
        z_hat = [backend.forward_ntt(z[j]) for j in range(l)]
        w_prime: List[List[int]] = []
        for i in range(k):
            acc = backend.vec_mul_mod(z_hat[0], pk.a_hat[i][0])
            for j in range(1, l):
                acc = backend.vec_add_mod(acc, backend.vec_mul_mod(z_hat[j], pk.a_hat[i][j]))
            ct1 = backend.vec_mul_mod(c_hat, pk.t1[i])
            w_prime.append(backend.inverse_ntt(backend.vec_sub_mod(acc, ct1)))

        # w1' = UseHint(h, w')
        w1 = [[use_hint(h[i][j], w_prime[i][j], gamma2, q) for j in range(params.n)]
              for i in range(k)]

        final_hash = derive_challenge(pk.tr, m_prime, w1_pack(w1, params))
        if final_hash != signature.c_tilde:
            logger.debug("Dilithium reject: challenge mismatch")
            return False
        return True


def verify_dilithium(pk: DilithiumPublicKey, message: bytes, signature: DilithiumSignature,
                     ctx: bytes = b"", backend: Optional[PolyBackend] = None) -> bool:
    """Verify a Dilithium signature with the default parameters"""
    return DilithiumVerifier(backend=backend).verify(pk, message, signature, ctx)
